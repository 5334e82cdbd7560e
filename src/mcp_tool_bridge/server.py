"""HTTP surfaces (/mcp and /invoke-tool) and tool registration."""

import json
import sys
import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, PARSE_ERROR

from .audit import AuditLogger
from .config import ServerConfig
from .dispatcher import Dispatcher
from .errors import MalformedRequestError
from .normalizer import invoke_tool
from .provider_client import ProviderClient
from .registry import ToolRegistry
from .tools import ToolHandler
from .tools.exchange import GetExchangeRateTool
from .tools.weather import GetWeatherTool
from .transport import BufferedResponseSink, ProtocolTransportAdapter, error_body


class BodyTooLargeError(Exception):
    pass


class InvalidJSONError(Exception):
    pass


def build_tool_handlers(config: ServerConfig, client: ProviderClient) -> Dict[str, ToolHandler]:
    """Instantiate the built-in tools, keyed by name."""
    handlers = [
        GetWeatherTool(client, base_url=config.weather_url),
        GetExchangeRateTool(client, base_url=config.exchange_url),
    ]
    return {handler.name: handler for handler in handlers}


def build_registry(config: ServerConfig, client: Optional[ProviderClient] = None) -> ToolRegistry:
    """Register the built-in tools and seal the registry."""
    handlers = build_tool_handlers(config, client or ProviderClient())
    return ToolRegistry.from_definitions(h.definition() for h in handlers.values())


def _is_json(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"


async def _read_json(request: Request, limit: int) -> Any:
    """
    Parse a JSON request body, reading at most limit bytes.

    Bodies that are not application/json parse as an empty object.

    Raises:
        BodyTooLargeError if the declared or streamed size exceeds limit
        InvalidJSONError if the body is not valid JSON
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise BodyTooLargeError()
    if not _is_json(request):
        return {}

    raw = bytearray()
    async for chunk in request.stream():
        raw.extend(chunk)
        if len(raw) > limit:
            raise BodyTooLargeError()
    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidJSONError() from e


def _render(sink: BufferedResponseSink) -> Response:
    if sink.body is None:
        return Response(status_code=sink.status_code)
    return JSONResponse(sink.body, status_code=sink.status_code)


def create_app(
    config: Optional[ServerConfig] = None,
    registry: Optional[ToolRegistry] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Server configuration (default: from environment)
        registry: Tool registry (default: the built-in tools)
        audit_logger: Audit log (default: per config)

    Returns:
        Configured FastAPI app; the adapter is available as app.state.adapter
    """
    config = config or ServerConfig.from_environment()
    audit_logger = audit_logger or AuditLogger(config.audit_log_path)
    registry = registry or build_registry(config)

    dispatcher = Dispatcher(registry, audit_logger=audit_logger)
    adapter = ProtocolTransportAdapter(
        dispatcher,
        server_name=config.server_name,
        server_version=config.server_version,
    )

    app = FastAPI(title=config.server_name, version=config.server_version)
    app.state.config = config
    app.state.registry = registry
    app.state.adapter = adapter

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        audit_logger.log_request(request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    @app.post("/mcp")
    async def mcp_endpoint(request: Request):
        """Raw JSON-RPC endpoint for MCP clients."""
        if not _is_json(request):
            return JSONResponse(
                error_body(
                    None, INVALID_REQUEST,
                    "Unsupported Media Type: Content-Type must be application/json",
                ),
                status_code=415,
            )
        try:
            message = await _read_json(request, config.max_body_bytes)
        except BodyTooLargeError:
            return JSONResponse(
                error_body(None, INVALID_REQUEST, "Request body too large"), status_code=413
            )
        except InvalidJSONError:
            return JSONResponse(error_body(None, PARSE_ERROR, "Parse error"), status_code=400)

        sink = BufferedResponseSink()
        try:
            await adapter.handle_request(message, sink)
        except Exception as e:
            print(f"Error handling MCP request: {type(e).__name__}: {e}", file=sys.stderr)
            if not sink.has_responded:
                return JSONResponse(
                    error_body(None, INTERNAL_ERROR, "Internal server error"), status_code=500
                )
        return _render(sink)

    @app.post("/invoke-tool")
    async def invoke_tool_endpoint(request: Request):
        """Simplified endpoint: {"tool": name, "args": {...}}."""
        try:
            body = await _read_json(request, config.max_body_bytes)
        except BodyTooLargeError:
            return JSONResponse({"ok": False, "error": "Request body too large"}, status_code=413)
        except InvalidJSONError:
            return JSONResponse({"ok": False, "error": "Invalid JSON body"}, status_code=400)

        try:
            sink = await invoke_tool(body, adapter)
        except MalformedRequestError as e:
            return JSONResponse({"ok": False, "error": str(e)}, status_code=400)
        except Exception as e:
            print(f"Error invoking tool: {type(e).__name__}: {e}", file=sys.stderr)
            return JSONResponse({"ok": False, "error": str(e)}, status_code=500)
        return _render(sink)

    return app
