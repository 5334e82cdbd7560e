"""Error taxonomy shared by the registry, dispatcher and HTTP surfaces."""

from typing import Iterable


class BridgeError(Exception):
    """Base class for all mcp-tool-bridge errors."""
    pass


class DuplicateToolError(BridgeError):
    """Raised when a tool name is registered twice."""

    def __init__(self, name: str):
        super().__init__(f"Tool {name} is already registered")
        self.name = name


class RegistrySealedError(BridgeError):
    """Raised when registering after startup has finished."""
    pass


class UnknownToolError(BridgeError):
    """Raised when looking up a tool that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"Tool {name} not found")
        self.name = name


class ValidationError(BridgeError):
    """Raised when call arguments do not match a tool's schema."""

    def __init__(self, fields: Iterable[str], reason: str):
        self.fields = tuple(fields)
        self.reason = reason
        super().__init__(reason)


class HandlerError(BridgeError):
    """Raised by a tool handler when its upstream call or result is unusable."""
    pass


class MalformedRequestError(BridgeError):
    """Raised by the simplified endpoint when the body names no tool."""
    pass


class ResponseAlreadySentError(BridgeError):
    """Raised when a response sink is written twice."""
    pass
