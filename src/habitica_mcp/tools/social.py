"""Tag, notification and shop tools for Habitica MCP integration."""

import logging
from typing import Any

from mcp.types import TextContent

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.dispatcher import Handler
from habitica_mcp.tools.formatting import display_value, pretty_json, text_content

logger = logging.getLogger(__name__)

DEFAULT_SHOP = "market"


class SocialTools:
    """Handlers for tags, notifications and shop listings."""

    def __init__(self, habitica_client: HabiticaClient, localizer: Localizer) -> None:
        self.habitica_client = habitica_client
        self.localizer = localizer

    async def get_tags_tool(self, arguments: dict[str, Any]) -> list[TextContent]:  # noqa: ARG002
        return [pretty_json(await self.habitica_client.get_tags())]

    async def create_tag_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        tag = await self.habitica_client.create_tag(arguments["name"])
        message = self.localizer.t("Successfully created tag: {name} (ID: {id})")
        return [
            text_content(
                message.format(
                    name=display_value(tag.get("name")), id=display_value(tag.get("id"))
                )
            )
        ]

    async def get_notifications_tool(self, arguments: dict[str, Any]) -> list[TextContent]:  # noqa: ARG002
        return [pretty_json(await self.habitica_client.get_notifications())]

    async def read_notification_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        notification_id = arguments["notificationId"]
        await self.habitica_client.read_notification(notification_id)
        message = self.localizer.t("Successfully marked notification as read (ID: {id})")
        return [text_content(message.format(id=notification_id))]

    async def get_shop_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """List a shop's items; the market is used when no ``shopType`` is given."""
        shop_type = arguments.get("shopType") or DEFAULT_SHOP
        return [pretty_json(await self.habitica_client.get_shop(shop_type))]

    def handlers(self) -> dict[str, Handler]:
        """Return the tool name -> handler mapping for tag, notification and shop tools."""
        return {
            "get_tags": self.get_tags_tool,
            "create_tag": self.create_tag_tool,
            "get_notifications": self.get_notifications_tool,
            "read_notification": self.read_notification_tool,
            "get_shop": self.get_shop_tool,
        }
