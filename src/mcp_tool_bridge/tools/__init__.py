"""Tool handler base class for the capability wrappers."""

from typing import Sequence

from mcp.types import TextContent

from ..registry import ToolDefinition
from ..validation import ArgumentSchema


class ToolHandler:
    """Base class for tools that wrap one upstream capability."""

    description = ""
    schema = ArgumentSchema()

    def __init__(self, name: str):
        """Initialize tool handler with name."""
        self.name = name

    def definition(self) -> ToolDefinition:
        """
        Build the registry entry for this tool.

        Returns:
            ToolDefinition whose handler is this tool's run_tool
        """
        return ToolDefinition(
            name=self.name,
            description=self.description,
            schema=self.schema,
            handler=self.run_tool,
        )

    async def run_tool(self, arguments: dict) -> Sequence[TextContent]:
        """
        Execute the tool with validated arguments.

        Must be implemented by subclasses.

        Args:
            arguments: Arguments already checked against self.schema

        Returns:
            Sequence of TextContent responses

        Raises:
            HandlerError if the upstream call fails or returns unusable data
        """
        raise NotImplementedError
