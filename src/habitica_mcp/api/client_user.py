"""User functionality mixin for Habitica API client.

This module provides the UserClientMixin class covering the authenticated
user document, purchases, spells and the pet/mount/equipment actions that
Habitica exposes under ``/user``.
"""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


class UserClientMixin:
    """Mixin providing user-scoped operations for the Habitica API client."""

    async def get_user(self: "BaseClientProtocol") -> dict[str, Any]:
        """Retrieve the full user document (profile, stats, items, ...).

        Raises:
            HabiticaAuthenticationError: Authentication failed
            HabiticaMalformedResponseError: Response lacks a user object
        """
        body = await self.make_request("GET", "user")
        return self.require_mapping(self.unwrap_data(body, "user"), "user", "data")

    async def buy(
        self: "BaseClientProtocol", key: str, quantity: int | float | None = None
    ) -> dict[str, Any]:
        """Buy a reward or shop item by key.

        Args:
            key: Reward ID or item key
            quantity: Number of items to buy; omitted from the body when None

        Returns:
            dict[str, Any]: The purchase result, carrying the remaining gold as ``gp``
        """
        endpoint = f"user/buy/{path_segment(key)}"
        data = {"quantity": quantity} if quantity is not None else None
        body = await self.make_request("POST", endpoint, data=data)
        return self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")

    async def cast_spell(
        self: "BaseClientProtocol", spell_id: str, target_id: str | None = None
    ) -> Any:
        """Cast a class skill, optionally on a target task, member or party.

        Returns:
            Any: The response envelope
        """
        params = {"targetId": target_id} if target_id else None
        body = await self.make_request(
            "POST", f"user/class/cast/{path_segment(spell_id)}", params=params
        )
        logger.debug("Cast spell %s (target=%s)", spell_id, target_id)
        return body

    async def feed_pet(self: "BaseClientProtocol", pet: str, food: str) -> Any:
        """Feed a pet.

        Habitica replies with the new feeding progress as ``data`` and a
        flavour text as the envelope-level ``message``.

        Returns:
            Any: The response envelope
        """
        return await self.make_request(
            "POST", f"user/feed/{path_segment(pet)}/{path_segment(food)}"
        )

    async def hatch_pet(self: "BaseClientProtocol", egg: str, hatching_potion: str) -> Any:
        """Hatch a pet from an egg and a hatching potion.

        Returns:
            Any: The response envelope
        """
        return await self.make_request(
            "POST", f"user/hatch/{path_segment(egg)}/{path_segment(hatching_potion)}"
        )

    async def equip(self: "BaseClientProtocol", item_type: str, key: str) -> Any:
        """Equip a pet, mount, costume piece or battle gear.

        Returns:
            Any: The response envelope
        """
        return await self.make_request(
            "POST", f"user/equip/{path_segment(item_type)}/{path_segment(key)}"
        )
