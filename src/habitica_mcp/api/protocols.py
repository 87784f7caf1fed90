"""Protocol definitions for Habitica API client mixins.

This module provides typing protocols that enable mixins to reference
base client methods without circular imports.
"""

from typing import Any, Protocol


class BaseClientProtocol(Protocol):
    """Protocol defining the interface that mixins can depend on.

    This protocol declares the essential methods that mixins need to access
    from the base client, enabling proper type checking without tight coupling.
    """

    async def make_request(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request to the Habitica API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (without base URL)
            data: JSON data for request body
            params: Query parameters

        Returns:
            Any: Parsed JSON response
        """
        ...

    @staticmethod
    def unwrap_data(body: Any, endpoint: str) -> Any:
        """Return the ``data`` member of a Habitica success envelope."""
        ...

    @staticmethod
    def require_mapping(value: Any, endpoint: str, field: str) -> dict[str, Any]:
        """Check that a response member is a JSON object."""
        ...
