"""Routing of tool invocations to their handlers.

The ToolDispatcher owns the explicit name -> handler mapping. It is validated
against the tool registry when constructed, so a descriptor without a handler
(or a handler without a descriptor) stops the server at startup rather than
failing at call time. Every handler failure leaves the dispatcher as one of
the standardized ToolCallError kinds.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from mcp.types import TextContent

from habitica_mcp.api.exceptions import HabiticaAPIError, HabiticaMalformedResponseError
from habitica_mcp.tools.errors import (
    FALLBACK_ERROR_MESSAGE,
    InternalToolError,
    MalformedResponseError,
    RegistryMismatchError,
    ToolCallError,
    ToolNotFoundError,
    UpstreamError,
)
from habitica_mcp.tools.registry import ToolDescriptor

Handler = Callable[[dict[str, Any]], Awaitable[list[TextContent]]]

logger = logging.getLogger(__name__)


def resolve_error_message(error: BaseException) -> str:
    """Choose the message reported to the caller for a failed tool call.

    Priority: the message Habitica put in its error body, then the exception's
    own message, then a fixed fallback.
    """
    remote_message = getattr(error, "remote_message", None)
    if isinstance(remote_message, str) and remote_message:
        return remote_message
    generic_message = str(error)
    if generic_message:
        return generic_message
    return FALLBACK_ERROR_MESSAGE


class ToolDispatcher:
    """Route {name, arguments} invocations to exactly one registered handler."""

    def __init__(
        self,
        registry: Iterable[ToolDescriptor],
        handlers: Mapping[str, Handler],
    ) -> None:
        """Bind the tool registry to its handlers.

        Args:
            registry: Ordered tool descriptors
            handlers: Mapping from tool name to handler coroutine function

        Raises:
            RegistryMismatchError: If names are duplicated, or the registry and
                the handler mapping do not name the same set of tools
        """
        self._registry = tuple(registry)
        self._handlers: Mapping[str, Handler] = MappingProxyType(dict(handlers))
        self._validate()

    def _validate(self) -> None:
        names = [descriptor.name for descriptor in self._registry]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate tool names in registry: {', '.join(duplicates)}"
            raise RegistryMismatchError(msg)

        without_handler = sorted(set(names) - set(self._handlers))
        without_descriptor = sorted(set(self._handlers) - set(names))
        if without_handler or without_descriptor:
            msg = (
                "Tool registry and handlers do not match "
                f"(no handler: {without_handler}, no descriptor: {without_descriptor})"
            )
            raise RegistryMismatchError(msg)

    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        """Return the full tool registry in display order."""
        return self._registry

    @property
    def tool_names(self) -> tuple[str, ...]:
        return tuple(descriptor.name for descriptor in self._registry)

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Invoke the handler registered for ``name``.

        Args:
            name: Tool name
            arguments: Tool arguments, passed to the handler without schema validation

        Returns:
            list[TextContent]: The handler's content blocks, unchanged

        Raises:
            ToolNotFoundError: No tool is registered under ``name``
            UpstreamError: The Habitica API call failed
            MalformedResponseError: Habitica answered with an unexpected body
            InternalToolError: Any other failure while handling the call
        """
        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("Unknown tool requested: %s", name)
            raise ToolNotFoundError.for_name(name)

        logger.debug("Dispatching tool %s", name)
        try:
            return await handler(arguments or {})
        except ToolCallError:
            raise
        except HabiticaMalformedResponseError as error:
            logger.warning("Tool %s received a malformed response: %s", name, error)
            raise MalformedResponseError(resolve_error_message(error)) from error
        except HabiticaAPIError as error:
            logger.warning("Tool %s failed upstream: %s", name, resolve_error_message(error))
            raise UpstreamError(resolve_error_message(error)) from error
        except KeyError as error:
            # Handlers index their arguments directly; a KeyError is an absent argument.
            message = f"Missing argument: {error.args[0]}" if error.args else FALLBACK_ERROR_MESSAGE
            logger.warning("Tool %s called without a required argument: %s", name, message)
            raise InternalToolError(message) from error
        except Exception as error:
            logger.exception("Unexpected error while handling tool %s", name)
            raise InternalToolError(resolve_error_message(error)) from error
