"""User profile, purchase and spell tools for Habitica MCP integration.

This module provides the UserTools class. The read-style tools return parts of
the user document (profile, stats, inventory) as pretty-printed JSON; the
write-style tools buy rewards or items and cast class skills.
"""

import logging
from typing import Any

from mcp.types import TextContent

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.api.exceptions import HabiticaMalformedResponseError
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.dispatcher import Handler
from habitica_mcp.tools.formatting import display_value, pretty_json, text_content

logger = logging.getLogger(__name__)


def user_member(user: dict[str, Any], *path: str) -> Any:
    """Walk ``path`` into the user document.

    Raises:
        HabiticaMalformedResponseError: When a member along the path is absent
    """
    value: Any = user
    for key in path:
        if not isinstance(value, dict) or key not in value:
            raise HabiticaMalformedResponseError.missing_field("user", ".".join(path))
        value = value[key]
    return value


class UserTools:
    """User-level tools providing MCP handlers for Habitica integration."""

    def __init__(self, habitica_client: HabiticaClient, localizer: Localizer) -> None:
        """Initialize UserTools with the Habitica client and display localizer.

        Args:
            habitica_client: Habitica API client for data operations
            localizer: Translator for user-facing messages
        """
        self.habitica_client = habitica_client
        self.localizer = localizer

    async def get_user_profile_tool(self, arguments: dict[str, Any]) -> list[TextContent]:  # noqa: ARG002
        user = await self.habitica_client.get_user()
        return [pretty_json(user)]

    async def get_stats_tool(self, arguments: dict[str, Any]) -> list[TextContent]:  # noqa: ARG002
        user = await self.habitica_client.get_user()
        return [pretty_json(user_member(user, "stats"))]

    async def get_inventory_tool(self, arguments: dict[str, Any]) -> list[TextContent]:  # noqa: ARG002
        user = await self.habitica_client.get_user()
        return [pretty_json(user_member(user, "items"))]

    async def buy_reward_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Buy a custom reward or gear item by key and report the remaining gold."""
        result = await self.habitica_client.buy(arguments["key"])
        message = self.localizer.t("Successfully bought reward! Remaining gold: {gp}")
        return [text_content(message.format(gp=display_value(result.get("gp"))))]

    async def buy_item_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Buy ``quantity`` (default 1) of a shop item and report the remaining gold."""
        item_key = arguments["itemKey"]
        quantity = arguments.get("quantity")
        if quantity is None:
            quantity = 1
        result = await self.habitica_client.buy(item_key, quantity)
        logger.info("Bought %s x%s", item_key, quantity)
        message = self.localizer.t("Successfully bought {key} x{quantity}! Remaining gold: {gp}")
        return [
            text_content(
                message.format(
                    key=item_key,
                    quantity=display_value(quantity),
                    gp=display_value(result.get("gp")),
                )
            )
        ]

    async def cast_spell_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        spell_id = arguments["spellId"]
        await self.habitica_client.cast_spell(spell_id, arguments.get("targetId"))
        message = self.localizer.t("Successfully cast spell: {spell}")
        return [text_content(message.format(spell=spell_id))]

    def handlers(self) -> dict[str, Handler]:
        """Return the tool name -> handler mapping for user tools."""
        return {
            "get_user_profile": self.get_user_profile_tool,
            "get_stats": self.get_stats_tool,
            "buy_reward": self.buy_reward_tool,
            "get_inventory": self.get_inventory_tool,
            "cast_spell": self.cast_spell_tool,
            "buy_item": self.buy_item_tool,
        }
