"""Bridge the simplified {tool, args} surface onto the JSON-RPC adapter."""

from typing import Any, Dict, Mapping

from .errors import MalformedRequestError
from .transport import BufferedResponseSink, ProtocolTransportAdapter

MISSING_TOOL_MESSAGE = "Missing 'tool' in body"


def build_call_message(body: Any) -> Dict[str, Any]:
    """
    Synthesize the JSON-RPC tools/call message an MCP client would send.

    Args:
        body: Parsed JSON body of the form {"tool": ..., "args": {...}}

    Returns:
        JSON-RPC message dict

    Raises:
        MalformedRequestError if the body does not name a tool
    """
    if not isinstance(body, Mapping) or not body.get("tool"):
        raise MalformedRequestError(MISSING_TOOL_MESSAGE)

    args = body.get("args")
    return {
        "jsonrpc": "2.0",
        "method": "tools/call",
        "params": {
            "name": body["tool"],
            "arguments": args if args is not None else {},
            "_meta": {"progressToken": 0},
        },
        "id": "1",
    }


async def invoke_tool(body: Any, adapter: ProtocolTransportAdapter) -> BufferedResponseSink:
    """Run a simplified-endpoint request through the same adapter as /mcp."""
    message = build_call_message(body)
    sink = BufferedResponseSink()
    await adapter.handle_request(message, sink)
    return sink
