"""Tags, notifications and shops mixin for Habitica API client."""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


class SocialClientMixin:
    """Mixin providing tag, notification and shop operations for the Habitica API client."""

    async def get_tags(self: "BaseClientProtocol") -> Any:
        """Retrieve the user's tags as the full response envelope."""
        return await self.make_request("GET", "tags")

    async def create_tag(self: "BaseClientProtocol", name: str) -> dict[str, Any]:
        """Create a tag.

        Returns:
            dict[str, Any]: The created tag (``id`` and ``name``)
        """
        body = await self.make_request("POST", "tags", data={"name": name})
        tag = self.require_mapping(self.unwrap_data(body, "tags"), "tags", "data")
        logger.debug("Created tag: %s", tag.get("id"))
        return tag

    async def get_notifications(self: "BaseClientProtocol") -> Any:
        """Retrieve the user's notifications as the full response envelope."""
        return await self.make_request("GET", "notifications")

    async def read_notification(self: "BaseClientProtocol", notification_id: str) -> None:
        """Mark a notification as read."""
        await self.make_request("POST", f"notifications/{path_segment(notification_id)}/read")
        logger.debug("Marked notification %s as read", notification_id)

    async def get_shop(self: "BaseClientProtocol", shop_type: str = "market") -> Any:
        """Retrieve the items offered by one shop as the full response envelope."""
        return await self.make_request("GET", f"shops/{path_segment(shop_type)}")
