"""Tool definitions and the process-wide tool registry."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Sequence, Union

from mcp.types import TextContent, Tool

from .errors import DuplicateToolError, RegistrySealedError, UnknownToolError
from .validation import ArgumentSchema

ToolResult = Sequence[TextContent]
Handler = Callable[[Dict[str, Any]], Union[ToolResult, Awaitable[ToolResult]]]


@dataclass(frozen=True)
class ToolDefinition:
    """A named tool: its description, argument schema and handler."""

    name: str
    description: str
    schema: ArgumentSchema
    handler: Handler

    def to_tool(self) -> Tool:
        """Describe this definition the way MCP clients list tools."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.schema.to_json_schema(),
        )


class ToolRegistry:
    """
    Registry of tool definitions keyed by name.

    Tools are registered once at startup; after seal() the registry is
    read-only and can be shared freely between concurrent requests.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDefinition] = {}
        self._sealed = False

    @classmethod
    def from_definitions(cls, definitions: Iterable[ToolDefinition]) -> "ToolRegistry":
        """Build a registry from definitions and seal it."""
        registry = cls()
        for definition in definitions:
            registry.register(definition)
        registry.seal()
        return registry

    def register(self, definition: ToolDefinition) -> None:
        """
        Add a tool definition.

        Raises:
            DuplicateToolError if the name is taken
            RegistrySealedError if the registry has been sealed
        """
        if self._sealed:
            raise RegistrySealedError(
                f"Cannot register {definition.name}: registry is sealed"
            )
        if definition.name in self._tools:
            raise DuplicateToolError(definition.name)
        self._tools[definition.name] = definition

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def tools(self) -> Mapping[str, ToolDefinition]:
        """Read-only view of the registered tools."""
        return MappingProxyType(self._tools)

    def lookup(self, name: str) -> ToolDefinition:
        """
        Return the definition registered under name.

        Raises:
            UnknownToolError if no such tool exists
        """
        try:
            return self._tools[name]
        except (KeyError, TypeError):
            raise UnknownToolError(name) from None

    def list_definitions(self) -> List[ToolDefinition]:
        """Definitions in registration order."""
        return list(self._tools.values())

    def names(self) -> List[str]:
        return list(self._tools.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
