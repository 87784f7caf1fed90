"""FastMCP binding for the Habitica tool catalogue.

FastMCP normally derives a tool's input schema from a Python signature. The
Habitica tools are described by hand-written JSON-Schemas instead, so each
descriptor is published through a Tool subclass that carries the schema
verbatim and forwards calls to the ToolDispatcher without validating them.
"""

import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from pydantic import ConfigDict, Field

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.checklist import ChecklistTools
from habitica_mcp.tools.dispatcher import Handler, ToolDispatcher
from habitica_mcp.tools.pets import PetTools
from habitica_mcp.tools.registry import ToolDescriptor, build_tool_registry
from habitica_mcp.tools.social import SocialTools
from habitica_mcp.tools.tasks import TaskTools
from habitica_mcp.tools.user import UserTools

logger = logging.getLogger(__name__)


class HabiticaTool(Tool):
    """A FastMCP tool backed by a ToolDescriptor and the shared dispatcher."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dispatcher: ToolDispatcher = Field(exclude=True, repr=False)

    @classmethod
    def from_descriptor(
        cls, descriptor: ToolDescriptor, dispatcher: ToolDispatcher
    ) -> "HabiticaTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        content = await self.dispatcher.dispatch(self.name, arguments)
        return ToolResult(content=content)


def build_handlers(habitica_client: HabiticaClient, localizer: Localizer) -> dict[str, Handler]:
    """Collect the handlers of every tool group into one name -> handler mapping."""
    handlers: dict[str, Handler] = {}
    for group in (
        TaskTools(habitica_client, localizer),
        ChecklistTools(habitica_client, localizer),
        UserTools(habitica_client, localizer),
        PetTools(habitica_client, localizer),
        SocialTools(habitica_client, localizer),
    ):
        handlers.update(group.handlers())
    return handlers


def build_dispatcher(habitica_client: HabiticaClient, localizer: Localizer) -> ToolDispatcher:
    """Build the registry and handler mapping and bind them into a dispatcher.

    Raises:
        RegistryMismatchError: If the registry and the handlers disagree
    """
    return ToolDispatcher(
        build_tool_registry(localizer),
        build_handlers(habitica_client, localizer),
    )


def register_tools(mcp_instance: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register every tool of the dispatcher's registry with the FastMCP instance."""
    for descriptor in dispatcher.list_tools():
        mcp_instance.add_tool(HabiticaTool.from_descriptor(descriptor, dispatcher))
    logger.info("Registered %d Habitica tools", len(dispatcher.list_tools()))
