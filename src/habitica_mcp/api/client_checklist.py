"""Checklist functionality mixin for Habitica API client."""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


def _checklist_endpoint(task_id: str, item_id: str | None = None) -> str:
    endpoint = f"tasks/{path_segment(task_id)}/checklist"
    if item_id is not None:
        endpoint = f"{endpoint}/{path_segment(item_id)}"
    return endpoint


def _find_item(task: dict[str, Any], item_id: str | None) -> dict[str, Any]:
    """Locate a checklist item inside a task payload.

    Habitica answers checklist mutations with the whole task; the item that
    was just added is the last one. When no match is found the task itself is
    returned so callers still have something to report.
    """
    checklist = task.get("checklist")
    if not isinstance(checklist, list) or not checklist:
        return task
    if item_id is None:
        last = checklist[-1]
        return last if isinstance(last, dict) else task
    for item in checklist:
        if isinstance(item, dict) and item.get("id") == item_id:
            return item
    return task


class ChecklistClientMixin:
    """Mixin providing checklist operations on tasks for the Habitica API client."""

    async def add_checklist_item(
        self: "BaseClientProtocol", task_id: str, text: str
    ) -> dict[str, Any]:
        """Append a checklist item to a task.

        Returns:
            dict[str, Any]: The newly added checklist item
        """
        endpoint = _checklist_endpoint(task_id)
        body = await self.make_request("POST", endpoint, data={"text": text})
        task = self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")
        return _find_item(task, None)

    async def update_checklist_item(
        self: "BaseClientProtocol", task_id: str, item_id: str, updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Update the text or completion state of a checklist item.

        Returns:
            dict[str, Any]: The updated checklist item
        """
        endpoint = _checklist_endpoint(task_id, item_id)
        body = await self.make_request("PUT", endpoint, data=updates)
        task = self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")
        return _find_item(task, item_id)

    async def delete_checklist_item(self: "BaseClientProtocol", task_id: str, item_id: str) -> None:
        """Remove a checklist item from a task."""
        await self.make_request("DELETE", _checklist_endpoint(task_id, item_id))
        logger.debug("Deleted checklist item %s from task %s", item_id, task_id)

    async def score_checklist_item(
        self: "BaseClientProtocol", task_id: str, item_id: str
    ) -> dict[str, Any]:
        """Toggle the completion state of a checklist item.

        Returns:
            dict[str, Any]: The scored checklist item
        """
        endpoint = f"{_checklist_endpoint(task_id, item_id)}/score"
        body = await self.make_request("POST", endpoint)
        task = self.require_mapping(self.unwrap_data(body, endpoint), endpoint, "data")
        return _find_item(task, item_id)
