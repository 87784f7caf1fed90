"""Checklist tools for Habitica MCP integration."""

import logging
from typing import Any

from mcp.types import TextContent

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.dispatcher import Handler
from habitica_mcp.tools.formatting import display_value, text_content

logger = logging.getLogger(__name__)

COMPLETED_MARK = "✓"
OPEN_MARK = "○"


class ChecklistTools:
    """Handlers for reading and editing the checklist of a task."""

    def __init__(self, habitica_client: HabiticaClient, localizer: Localizer) -> None:
        self.habitica_client = habitica_client
        self.localizer = localizer

    async def get_task_checklist_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """List a task's checklist as a header block followed by one line per item.

        An empty checklist yields a placeholder line instead of an empty block.
        """
        t = self.localizer.t
        task = await self.habitica_client.get_task(arguments["taskId"])
        checklist = task.get("checklist") or []

        header = t("Task: {text}\nChecklist items ({count}):").format(
            text=display_value(task.get("text")), count=len(checklist)
        )
        if checklist:
            lines = [
                "{mark} {text} (ID: {id})".format(
                    mark=COMPLETED_MARK if item.get("completed") else OPEN_MARK,
                    text=display_value(item.get("text")),
                    id=display_value(item.get("id")),
                )
                for item in checklist
            ]
            body = "\n".join(lines)
        else:
            body = t("No checklist items found")
        return [text_content(header), text_content(body)]

    async def add_checklist_item_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        item = await self.habitica_client.add_checklist_item(arguments["taskId"], arguments["text"])
        message = self.localizer.t("Successfully added checklist item: {text} (ID: {id})")
        return [
            text_content(
                message.format(
                    text=display_value(item.get("text")), id=display_value(item.get("id"))
                )
            )
        ]

    async def update_checklist_item_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Update an item; every argument except the two IDs is sent as a change."""
        task_id = arguments["taskId"]
        item_id = arguments["itemId"]
        updates = {
            key: value for key, value in arguments.items() if key not in {"taskId", "itemId"}
        }
        item = await self.habitica_client.update_checklist_item(task_id, item_id, updates)
        message = self.localizer.t("Successfully updated checklist item: {text}")
        return [text_content(message.format(text=display_value(item.get("text"))))]

    async def delete_checklist_item_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        item_id = arguments["itemId"]
        await self.habitica_client.delete_checklist_item(arguments["taskId"], item_id)
        message = self.localizer.t("Successfully deleted checklist item (ID: {id})")
        return [text_content(message.format(id=item_id))]

    async def score_checklist_item_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        item = await self.habitica_client.score_checklist_item(
            arguments["taskId"], arguments["itemId"]
        )
        message = self.localizer.t(
            "Successfully scored checklist item: {text} (completed: {completed})"
        )
        return [
            text_content(
                message.format(
                    text=display_value(item.get("text")),
                    completed=display_value(item.get("completed")),
                )
            )
        ]

    def handlers(self) -> dict[str, Handler]:
        """Return the tool name -> handler mapping for checklist tools."""
        return {
            "add_checklist_item": self.add_checklist_item_tool,
            "update_checklist_item": self.update_checklist_item_tool,
            "delete_checklist_item": self.delete_checklist_item_tool,
            "get_task_checklist": self.get_task_checklist_tool,
            "score_checklist_item": self.score_checklist_item_tool,
        }
