"""Tool-call error kinds surfaced to MCP callers.

Every failure of a tool invocation is reported as one of these errors. They
derive from FastMCP's ToolError so their message reaches the client unmasked,
and each carries the JSON-RPC error code describing its kind.
"""

from fastmcp.exceptions import ToolError
from mcp.types import INTERNAL_ERROR, METHOD_NOT_FOUND

FALLBACK_ERROR_MESSAGE = "Unknown error"


class ToolCallError(ToolError):
    """Base class for standardized tool-call failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class ToolNotFoundError(ToolCallError):
    """The requested tool name is not registered."""

    code = METHOD_NOT_FOUND

    @classmethod
    def for_name(cls, name: str) -> "ToolNotFoundError":
        return cls(f"Unknown tool: {name}")


class UpstreamError(ToolCallError):
    """The Habitica API rejected the request or could not be reached."""


class MalformedResponseError(ToolCallError):
    """The Habitica API answered with a body of unexpected shape."""


class InternalToolError(ToolCallError):
    """A local failure occurred while handling the tool call."""


class RegistryMismatchError(RuntimeError):
    """Registered tool descriptors and handlers do not correspond one to one."""
