"""Declarative catalogue of the Habitica tools exposed over MCP.

Each tool is described by a ToolDescriptor holding its name, a display
description and the JSON-Schema of the arguments it accepts. The catalogue is
built once per process; its order is the order in which tools are listed.
"""

import copy
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from habitica_mcp.i18n import Localizer


class ToolDescriptor(BaseModel):
    """Immutable description of one tool: name, description and input schema."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str
    input_schema: dict[str, Any]

    def to_mcp(self) -> dict[str, Any]:
        """Render the descriptor in the MCP ``tools/list`` wire shape."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


TASK_LIST_TYPES = ["habits", "dailys", "todos", "rewards"]
TASK_TYPES = ["habit", "daily", "todo", "reward"]
TASK_WEIGHTS = [0.1, 1, 1.5, 2]
FREQUENCIES = ["daily", "weekly", "monthly", "yearly"]
SCORE_DIRECTIONS = ["up", "down"]
EQUIP_TYPES = ["mount", "pet", "costume", "equipped"]
SHOP_TYPES = ["market", "questShop", "timeTravelersShop", "seasonalShop"]

_WEEKDAYS = [
    ("m", "Monday"),
    ("t", "Tuesday"),
    ("w", "Wednesday"),
    ("th", "Thursday"),
    ("f", "Friday"),
    ("s", "Saturday"),
    ("su", "Sunday"),
]


def _object(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _string(description: str, enum: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "string"}
    if enum is not None:
        schema["enum"] = enum
    schema["description"] = description
    return schema


def _schedule_properties(t: Callable[[str], str], interval_note: str) -> dict[str, Any]:
    """Repeat-schedule properties shared by create_task and update_task."""
    return {
        "frequency": _string(
            t(
                'Repeat frequency for daily tasks. "daily"=every X days, "weekly"=specific '
                'days of week, "monthly"=by day/week of month, "yearly"=annually'
            ),
            FREQUENCIES,
        ),
        "everyX": {
            "type": "integer",
            "minimum": 1,
            "description": t(
                'Repeat interval. For frequency="daily": every X days. "weekly": every X '
                'weeks. "monthly": every X months' + interval_note
            ),
        },
        "repeat": {
            "type": "object",
            "properties": {
                key: {"type": "boolean", "description": t(day)} for key, day in _WEEKDAYS
            },
            "description": t(
                'Days of week when task is active (for frequency="weekly"). Example: '
                '{"m":true,"w":true,"f":true} for Mon/Wed/Fri'
            ),
        },
        "daysOfMonth": {
            "type": "array",
            "items": {"type": "integer", "minimum": 1, "maximum": 31},
            "description": t(
                'Days of month when task is due (for frequency="monthly"). Example: [1,15] '
                "for 1st and 15th"
            ),
        },
        "weeksOfMonth": {
            "type": "array",
            "items": {"type": "integer", "minimum": 0, "maximum": 4},
            "description": t(
                "Weeks of month (0=first, 1=second, 2=third, 3=fourth, 4=last) combined with "
                "repeat days. Example: [0] with repeat.m=true for 1st Monday"
            ),
        },
        "startDate": _string(
            t(
                'Start date in ISO 8601 format (e.g., "2024-01-15"). Task becomes active on '
                "this date"
            )
        ),
    }


def build_tool_registry(localizer: Localizer) -> tuple[ToolDescriptor, ...]:  # noqa: PLR0915
    """Build the ordered tool catalogue with descriptions in the display language.

    Args:
        localizer: Translator applied to every description string

    Returns:
        tuple[ToolDescriptor, ...]: The 26 tool descriptors in display order
    """
    t = localizer.t
    task_id = _string(t("Task ID"))
    item_id = _string(t("Checklist item ID"))
    checklist_text = _string(t("Checklist item text"))

    def tool(name: str, description: str, input_schema: dict[str, Any]) -> ToolDescriptor:
        return ToolDescriptor(
            name=name, description=t(description), input_schema=copy.deepcopy(input_schema)
        )

    return (
        tool("get_user_profile", "Get user profile", _object({})),
        tool(
            "get_tasks",
            "Get tasks list",
            _object({"type": _string(t("Task type"), TASK_LIST_TYPES)}),
        ),
        tool(
            "create_task",
            "Create new task. For daily tasks, use frequency/everyX/repeat/startDate to set "
            "custom schedules",
            _object(
                {
                    "type": _string(t("Task type"), TASK_TYPES),
                    "text": _string(t("Task title")),
                    "notes": _string(t("Task notes")),
                    "difficulty": {
                        "type": "number",
                        "enum": TASK_WEIGHTS,
                        "description": t(
                            "Difficulty (0.1=easy, 1=medium, 1.5=hard, 2=very hard)"
                        ),
                    },
                    "priority": {
                        "type": "number",
                        "enum": TASK_WEIGHTS,
                        "description": t("Priority (0.1=low, 1=med, 1.5=high, 2=urgent)"),
                    },
                    **_schedule_properties(t, ". Default is 1"),
                    "checklist": {
                        "type": "array",
                        "items": _object(
                            {
                                "text": checklist_text,
                                "completed": {
                                    "type": "boolean",
                                    "description": t("Completed status"),
                                    "default": False,
                                },
                            },
                            ["text"],
                        ),
                        "description": t("Checklist items"),
                    },
                },
                ["type", "text"],
            ),
        ),
        tool(
            "score_task",
            "Score task / habit",
            _object(
                {
                    "taskId": task_id,
                    "direction": _string(
                        t("Direction (up=positive, down=negative, habits only)"),
                        SCORE_DIRECTIONS,
                    ),
                },
                ["taskId"],
            ),
        ),
        tool(
            "update_task",
            "Update task properties including schedule. For daily tasks, use "
            "frequency/everyX/repeat/startDate to modify repeat schedule",
            _object(
                {
                    "taskId": task_id,
                    "text": _string(t("Task title")),
                    "notes": _string(t("Task notes")),
                    "completed": {"type": "boolean", "description": t("Completed flag")},
                    **_schedule_properties(t, ""),
                },
                ["taskId"],
            ),
        ),
        tool("delete_task", "Delete task", _object({"taskId": task_id}, ["taskId"])),
        tool("get_stats", "Get user stats", _object({})),
        tool(
            "buy_reward",
            "Buy reward",
            _object({"key": _string(t("Reward key or ID"))}, ["key"]),
        ),
        tool("get_inventory", "Get inventory", _object({})),
        tool(
            "cast_spell",
            "Cast spell",
            _object(
                {
                    "spellId": _string(t("Spell ID")),
                    "targetId": _string(t("Target ID (optional)")),
                },
                ["spellId"],
            ),
        ),
        tool("get_tags", "Get tags list", _object({})),
        tool("create_tag", "Create tag", _object({"name": _string(t("Tag name"))}, ["name"])),
        tool("get_pets", "Get pets list", _object({})),
        tool(
            "feed_pet",
            "Feed pet",
            _object(
                {"pet": _string(t("Pet key")), "food": _string(t("Food key"))},
                ["pet", "food"],
            ),
        ),
        tool(
            "hatch_pet",
            "Hatch pet",
            _object(
                {
                    "egg": _string(t("Egg key")),
                    "hatchingPotion": _string(t("Hatching potion key")),
                },
                ["egg", "hatchingPotion"],
            ),
        ),
        tool("get_mounts", "Get mounts list", _object({})),
        tool(
            "equip_item",
            "Equip item",
            _object(
                {
                    "type": _string(t("Equipment type"), EQUIP_TYPES),
                    "key": _string(t("Item key")),
                },
                ["type", "key"],
            ),
        ),
        tool("get_notifications", "Get notifications list", _object({})),
        tool(
            "read_notification",
            "Mark notification as read",
            _object({"notificationId": _string(t("Notification ID"))}, ["notificationId"]),
        ),
        tool(
            "get_shop",
            "Get shop items",
            _object({"shopType": _string(t("Shop type"), SHOP_TYPES)}),
        ),
        tool(
            "buy_item",
            "Buy shop item",
            _object(
                {
                    "itemKey": _string(t("Item key")),
                    "quantity": {
                        "type": "number",
                        "description": t("Purchase quantity"),
                        "default": 1,
                    },
                },
                ["itemKey"],
            ),
        ),
        tool(
            "add_checklist_item",
            "Add checklist item to task",
            _object({"taskId": task_id, "text": checklist_text}, ["taskId", "text"]),
        ),
        tool(
            "update_checklist_item",
            "Update checklist item",
            _object(
                {
                    "taskId": task_id,
                    "itemId": item_id,
                    "text": checklist_text,
                    "completed": {"type": "boolean", "description": t("Completed status")},
                },
                ["taskId", "itemId"],
            ),
        ),
        tool(
            "delete_checklist_item",
            "Delete checklist item",
            _object({"taskId": task_id, "itemId": item_id}, ["taskId", "itemId"]),
        ),
        tool(
            "get_task_checklist",
            "Get task checklist items",
            _object({"taskId": task_id}, ["taskId"]),
        ),
        tool(
            "score_checklist_item",
            "Score checklist item (mark complete/incomplete)",
            _object({"taskId": task_id, "itemId": item_id}, ["taskId", "itemId"]),
        ),
    )
