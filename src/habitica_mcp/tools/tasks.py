"""Task management tools for Habitica MCP integration.

This module provides the TaskTools class which implements the handlers for
listing, creating, scoring, updating and deleting Habitica tasks.
"""

import logging
from typing import Any

from mcp.types import TextContent

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.dispatcher import Handler
from habitica_mcp.tools.formatting import display_value, pretty_json, text_content

# Configure logger to write to stderr
logger = logging.getLogger(__name__)


class TaskTools:
    """Task management tools for Habitica integration.

    Each ``*_tool`` coroutine takes the raw argument mapping of one tool call,
    performs a single Habitica request and returns the text blocks to send back.
    """

    def __init__(self, habitica_client: HabiticaClient, localizer: Localizer) -> None:
        """Initialize TaskTools with the Habitica client and display localizer.

        Args:
            habitica_client: Habitica API client for data operations
            localizer: Translator for user-facing messages
        """
        self.habitica_client = habitica_client
        self.localizer = localizer

    async def get_tasks_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Return the user's tasks, optionally filtered by ``type``."""
        body = await self.habitica_client.get_tasks(arguments.get("type"))
        return [pretty_json(body)]

    async def create_task_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Create a task; the arguments are forwarded as the task body."""
        task = await self.habitica_client.create_task(dict(arguments))
        logger.info("Created task %s", task.get("id"))
        message = self.localizer.t("Successfully created task: {text} (ID: {id})")
        return [
            text_content(
                message.format(
                    text=display_value(task.get("text")), id=display_value(task.get("id"))
                )
            )
        ]

    async def score_task_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Score a task up (default) or down and summarize the rewards."""
        result = await self.habitica_client.score_task(
            arguments["taskId"], arguments.get("direction") or "up"
        )

        t = self.localizer.t
        parts = [t("Task completed!")]
        if result.get("exp"):
            parts.append(t("Gained {exp} XP").format(exp=display_value(result["exp"])))
        if result.get("gp"):
            parts.append(t("Gained {gp} gold").format(gp=display_value(result["gp"])))
        if result.get("lvl"):
            parts.append(t("Leveled up to {lvl}!").format(lvl=display_value(result["lvl"])))
        return [text_content(" ".join(parts))]

    async def update_task_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Update a task; every argument except ``taskId`` is sent as a change."""
        task_id = arguments["taskId"]
        updates = {key: value for key, value in arguments.items() if key != "taskId"}
        task = await self.habitica_client.update_task(task_id, updates)
        message = self.localizer.t("Successfully updated task: {text}")
        return [text_content(message.format(text=display_value(task.get("text"))))]

    async def delete_task_tool(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Delete a task by ID."""
        task_id = arguments["taskId"]
        await self.habitica_client.delete_task(task_id)
        logger.info("Deleted task %s", task_id)
        message = self.localizer.t("Successfully deleted task (ID: {id})")
        return [text_content(message.format(id=task_id))]

    def handlers(self) -> dict[str, Handler]:
        """Return the tool name -> handler mapping for task tools."""
        return {
            "get_tasks": self.get_tasks_tool,
            "create_task": self.create_task_tool,
            "score_task": self.score_task_tool,
            "update_task": self.update_task_tool,
            "delete_task": self.delete_task_tool,
        }
