"""Tasks mixin for Habitica API client.

This module provides the TasksClientMixin class containing the task CRUD and
scoring operations, designed to be composed with the BaseClient.
"""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

# Configure logger to write to stderr
logger = logging.getLogger(__name__)


class TasksClientMixin:
    """Mixin providing task-related operations for the Habitica API client."""

    async def get_tasks(self: "BaseClientProtocol", task_type: str | None = None) -> Any:
        """Retrieve the user's tasks, optionally restricted to one task type.

        Args:
            task_type: One of ``habits``, ``dailys``, ``todos`` or ``rewards``

        Returns:
            Any: The full response envelope as returned by Habitica
        """
        params = {"type": task_type} if task_type else None
        body = await self.make_request("GET", "tasks/user", params=params)
        logger.debug("Retrieved tasks (type=%s)", task_type)
        return body

    async def get_task(self: "BaseClientProtocol", task_id: str) -> dict[str, Any]:
        """Retrieve a single task by ID.

        Raises:
            HabiticaNotFoundError: Task not found
            HabiticaMalformedResponseError: Response lacks a task object
        """
        endpoint = f"tasks/{path_segment(task_id)}"
        body = await self.make_request("GET", endpoint)
        return self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")

    async def create_task(self: "BaseClientProtocol", payload: dict[str, Any]) -> dict[str, Any]:
        """Create a task for the user.

        Args:
            payload: Task fields forwarded verbatim as the request body

        Returns:
            dict[str, Any]: The created task
        """
        endpoint = "tasks/user"
        body = await self.make_request("POST", endpoint, data=payload)
        task = self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")
        logger.debug("Created task: %s", task.get("id"))
        return task

    async def score_task(
        self: "BaseClientProtocol", task_id: str, direction: str = "up"
    ) -> dict[str, Any]:
        """Score a task up or down.

        Returns:
            dict[str, Any]: The score result carrying the updated stats (exp, gp, lvl, ...)
        """
        endpoint = f"tasks/{path_segment(task_id)}/score/{path_segment(direction)}"
        body = await self.make_request("POST", endpoint)
        return self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")

    async def update_task(
        self: "BaseClientProtocol", task_id: str, updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Update an existing task.

        Args:
            task_id: The ID of the task to update
            updates: Changed fields forwarded verbatim as the request body

        Returns:
            dict[str, Any]: The updated task
        """
        endpoint = f"tasks/{path_segment(task_id)}"
        body = await self.make_request("PUT", endpoint, data=updates)
        return self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")

    async def delete_task(self: "BaseClientProtocol", task_id: str) -> None:
        """Delete a task.

        Raises:
            HabiticaNotFoundError: Task not found
        """
        await self.make_request("DELETE", f"tasks/{path_segment(task_id)}")
        logger.debug("Deleted task: %s", task_id)
