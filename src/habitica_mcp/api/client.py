"""Composed Habitica API client with modular functionality.

This module provides the HabiticaClient class that combines the base HTTP
infrastructure with feature-specific mixins for a complete API client.
"""

from types import TracebackType

from habitica_mcp.api.client_base import BaseClient
from habitica_mcp.api.client_checklist import ChecklistClientMixin
from habitica_mcp.api.client_social import SocialClientMixin
from habitica_mcp.api.client_tasks import TasksClientMixin
from habitica_mcp.api.client_user import UserClientMixin


class HabiticaClient(
    BaseClient,
    TasksClientMixin,
    ChecklistClientMixin,
    UserClientMixin,
    SocialClientMixin,
):
    """Complete Habitica API client with all functionality.

    This class composes the base HTTP client with all feature-specific mixins
    to provide a unified interface for interacting with the Habitica API.
    """

    def __str__(self) -> str:
        """Return string representation without exposing the API token."""
        return f"HabiticaClient(base_url={self._base_url}, token=***redacted***)"

    def __repr__(self) -> str:
        """Return repr without exposing the API token."""
        return f"HabiticaClient(base_url='{self._base_url}', token='***redacted***')"

    async def __aenter__(self) -> "HabiticaClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit."""
        await super().__aexit__(exc_type, exc_val, exc_tb)


__all__ = ["HabiticaClient"]
