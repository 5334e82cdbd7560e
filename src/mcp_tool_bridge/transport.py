"""JSON-RPC transport adapter: turns protocol messages into dispatches."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from mcp.types import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    LATEST_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    Implementation,
    InitializeResult,
    JSONRPCNotification,
    JSONRPCRequest,
    ServerCapabilities,
    ToolsCapability,
)
from pydantic import ValidationError as ModelValidationError

from .dispatcher import Dispatcher, Success
from .errors import ResponseAlreadySentError

JSONRPC_VERSION = "2.0"

RequestId = Union[str, int, None]


@dataclass(frozen=True)
class CallEnvelope:
    """A single tools/call request, extracted from a JSON-RPC message."""

    tool_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    request_id: RequestId = None


class ResponseSink(Protocol):
    """Where the adapter writes its response. Written at most once."""

    def set_status(self, code: int) -> None:
        ...

    def write_json(self, body: Dict[str, Any]) -> None:
        ...

    @property
    def has_responded(self) -> bool:
        ...


class BufferedResponseSink:
    """In-process response sink; the HTTP route renders it afterwards."""

    def __init__(self):
        self.status_code = 200
        self.body: Optional[Dict[str, Any]] = None
        self._responded = False

    def set_status(self, code: int) -> None:
        if self._responded:
            raise ResponseAlreadySentError("Cannot set status after the response was sent")
        self.status_code = code

    def write_json(self, body: Dict[str, Any]) -> None:
        if self._responded:
            raise ResponseAlreadySentError("Response already sent")
        self.body = body
        self._responded = True

    @property
    def has_responded(self) -> bool:
        return self._responded


def error_body(request_id: RequestId, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def result_body(request_id: RequestId, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def _valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int))


def parse_message(message: Any) -> Optional[Union[JSONRPCRequest, JSONRPCNotification]]:
    """
    Check the JSON-RPC envelope of a message.

    params are left to the method handlers, so only jsonrpc, method and id
    are validated here.

    Returns:
        JSONRPCRequest or JSONRPCNotification, or None if the message is invalid
    """
    if not isinstance(message, Mapping):
        return None
    if "id" in message and not _valid_id(message["id"]):
        return None

    envelope = {key: value for key, value in message.items() if key != "params"}
    model = JSONRPCRequest if "id" in message else JSONRPCNotification
    try:
        return model.model_validate(envelope)
    except ModelValidationError:
        return None


class ProtocolTransportAdapter:
    """
    Stateless JSON-RPC adapter in front of the dispatcher.

    Each call to handle_request processes one message and writes exactly one
    response to the sink. No session id is issued; nothing is kept between
    calls apart from the dispatcher and server identity.
    """

    def __init__(self, dispatcher: Dispatcher, server_name: str = "mcp-server",
                 server_version: str = "1.0.0"):
        self.dispatcher = dispatcher
        self.server_name = server_name
        self.server_version = server_version

    async def handle_request(self, message: Any, sink: ResponseSink) -> None:
        """
        Handle one JSON-RPC message.

        Args:
            message: Parsed JSON body
            sink: Response sink to write to
        """
        parsed = parse_message(message)
        if parsed is None:
            sink.set_status(400)
            sink.write_json(error_body(None, INVALID_REQUEST, "Invalid Request"))
            return

        method = parsed.method

        if isinstance(parsed, JSONRPCNotification):
            # Notification: 202 Accepted with no body
            sink.set_status(202)
            return

        request_id = message["id"]
        params = message.get("params")
        if params is None:
            params = {}

        if method == "tools/call":
            body = await self._call_tool(request_id, params)
        elif method == "tools/list":
            body = self._list_tools(request_id)
        elif method == "initialize":
            body = self._initialize(request_id, params)
        elif method == "ping":
            body = result_body(request_id, {})
        else:
            body = error_body(request_id, METHOD_NOT_FOUND, "Method not found")

        sink.set_status(200)
        sink.write_json(body)

    def parse_call(self, request_id: RequestId, params: Any) -> CallEnvelope:
        """
        Extract the tool name and arguments from tools/call params.

        Raises:
            ValueError if params is not an object or name is not a string
        """
        if not isinstance(params, Mapping):
            raise ValueError("params must be an object")
        name = params.get("name")
        if not isinstance(name, str):
            raise ValueError("params.name must be a string")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        return CallEnvelope(tool_name=name, arguments=arguments, request_id=request_id)

    async def _call_tool(self, request_id: RequestId, params: Any) -> Dict[str, Any]:
        try:
            envelope = self.parse_call(request_id, params)
        except ValueError as e:
            return error_body(request_id, INVALID_PARAMS, f"Invalid params: {e}")

        outcome = await self.dispatcher.dispatch(envelope.tool_name, envelope.arguments)
        if isinstance(outcome, Success):
            content = [
                item.model_dump(mode="json", by_alias=True, exclude_none=True)
                for item in outcome.content
            ]
            return result_body(envelope.request_id, {"content": content})
        return error_body(envelope.request_id, outcome.code, outcome.message)

    def _list_tools(self, request_id: RequestId) -> Dict[str, Any]:
        tools = [
            definition.to_tool().model_dump(mode="json", by_alias=True, exclude_none=True)
            for definition in self.dispatcher.registry.list_definitions()
        ]
        return result_body(request_id, {"tools": tools})

    def _initialize(self, request_id: RequestId, params: Any) -> Dict[str, Any]:
        requested = params.get("protocolVersion") if isinstance(params, Mapping) else None
        result = InitializeResult(
            protocolVersion=requested if isinstance(requested, str) else LATEST_PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability(listChanged=False)),
            serverInfo=Implementation(name=self.server_name, version=self.server_version),
        )
        return result_body(
            request_id, result.model_dump(mode="json", by_alias=True, exclude_none=True)
        )
