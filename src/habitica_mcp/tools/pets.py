"""Pet, mount and equipment tools for Habitica MCP integration."""

import logging
from typing import Any

from mcp.types import TextContent

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.dispatcher import Handler
from habitica_mcp.tools.formatting import pretty_json, text_content
from habitica_mcp.tools.user import user_member

logger = logging.getLogger(__name__)


def _response_message(body: Any) -> str | None:
    """Flavour text Habitica attaches to pet actions, from the envelope or its data."""
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if not message and isinstance(body.get("data"), dict):
        message = body["data"].get("message")
    return message if isinstance(message, str) and message else None


class PetTools:
    """Handlers for the stable: pets, mounts, feeding, hatching and equipping."""

    def __init__(self, habitica_client: HabiticaClient, localizer: Localizer) -> None:
        self.habitica_client = habitica_client
        self.localizer = localizer

    async def get_pets_tool(self, arguments: dict[str, Any]) -> list[TextContent]:  # noqa: ARG002
        user = await self.habitica_client.get_user()
        return [pretty_json(user_member(user, "items", "pets"))]

    async def get_mounts_tool(self, arguments: dict[str, Any]) -> list[TextContent]:  # noqa: ARG002
        user = await self.habitica_client.get_user()
        return [pretty_json(user_member(user, "items", "mounts"))]

    async def feed_pet_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Feed a pet, appending Habitica's reaction text when there is one."""
        pet = arguments["pet"]
        body = await self.habitica_client.feed_pet(pet, arguments["food"])
        message = self.localizer.t("Successfully fed pet {pet}!").format(pet=pet)
        reaction = _response_message(body)
        if reaction:
            message = f"{message} {reaction}"
        return [text_content(message)]

    async def hatch_pet_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        egg = arguments["egg"]
        potion = arguments["hatchingPotion"]
        await self.habitica_client.hatch_pet(egg, potion)
        logger.info("Hatched %s-%s", egg, potion)
        message = self.localizer.t("Successfully hatched pet! Got {egg}-{potion}")
        return [text_content(message.format(egg=egg, potion=potion))]

    async def equip_item_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        item_type = arguments["type"]
        key = arguments["key"]
        await self.habitica_client.equip(item_type, key)
        message = self.localizer.t("Successfully equipped {type}: {key}")
        return [text_content(message.format(type=item_type, key=key))]

    def handlers(self) -> dict[str, Handler]:
        """Return the tool name -> handler mapping for stable tools."""
        return {
            "get_pets": self.get_pets_tool,
            "feed_pet": self.feed_pet_tool,
            "hatch_pet": self.hatch_pet_tool,
            "get_mounts": self.get_mounts_tool,
            "equip_item": self.equip_item_tool,
        }
