"""Helpers turning Habitica responses into MCP text content."""

import json
from typing import Any

from mcp.types import TextContent


def text_content(text: str) -> TextContent:
    """Wrap a string as an MCP text block."""
    return TextContent(type="text", text=text)


def pretty_json(value: Any) -> TextContent:
    """Render a JSON value as a pretty-printed (2-space indented) text block."""
    return text_content(json.dumps(value, indent=2, ensure_ascii=False))


def display_value(value: Any) -> str:
    """Render a scalar from a response the way it reads in JSON.

    Booleans become ``true``/``false``, integral floats lose their ``.0``
    suffix and a missing value reads ``unknown``.
    """
    if value is None:
        return "unknown"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
