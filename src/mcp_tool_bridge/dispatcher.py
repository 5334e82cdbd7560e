"""Validate-and-invoke dispatch of tool calls into result envelopes."""

import inspect
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, TextContent

from .audit import AuditLogger
from .errors import UnknownToolError, ValidationError
from .registry import ToolRegistry
from .validation import validate


@dataclass(frozen=True)
class Success:
    """A tool call that completed; content is what the handler returned."""

    content: Tuple[TextContent, ...]


@dataclass(frozen=True)
class Failure:
    """A tool call that failed, with a JSON-RPC error code."""

    code: int
    message: str


ResultEnvelope = Union[Success, Failure]


class Dispatcher:
    """Runs one tool call: lookup, validate, invoke, wrap."""

    def __init__(self, registry: ToolRegistry, audit_logger: Optional[AuditLogger] = None):
        self.registry = registry
        self.audit_logger = audit_logger or AuditLogger()

    async def dispatch(self, tool_name: str, raw_arguments: Any) -> ResultEnvelope:
        """
        Execute a tool by name.

        Never raises for tool-level problems: unknown tools, bad arguments and
        handler exceptions all come back as a Failure.

        Args:
            tool_name: Registered tool name
            raw_arguments: Arguments as received from the caller

        Returns:
            Success with the handler's content, or Failure
        """
        try:
            definition = self.registry.lookup(tool_name)
        except UnknownToolError as e:
            self.audit_logger.log("UNKNOWN_TOOL", tool_name, str(e))
            return Failure(code=METHOD_NOT_FOUND, message=str(e))

        try:
            arguments = validate(definition.schema, raw_arguments)
        except ValidationError as e:
            self.audit_logger.log("INVALID_ARGS", tool_name, f"fields={','.join(e.fields)}")
            return Failure(
                code=INVALID_PARAMS,
                message=f"Invalid arguments for tool {tool_name}: {e.reason}",
            )

        try:
            content = definition.handler(arguments)
            if inspect.isawaitable(content):
                content = await content
            content = tuple(content)
        except Exception as e:
            self.audit_logger.log("CALL_FAILED", tool_name, f"{type(e).__name__}: {e}")
            return Failure(code=INTERNAL_ERROR, message=str(e))

        self.audit_logger.log("CALL_SUCCESS", tool_name, f"items={len(content)}")
        return Success(content=content)
