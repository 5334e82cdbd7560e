import io
from typing import Any, Callable, Dict

import httpx
import pytest
from fastapi.testclient import TestClient
from mcp.types import TextContent

from mcp_tool_bridge.audit import AuditLogger
from mcp_tool_bridge.config import ServerConfig
from mcp_tool_bridge.dispatcher import Dispatcher
from mcp_tool_bridge.provider_client import ProviderClient
from mcp_tool_bridge.registry import ToolDefinition, ToolRegistry
from mcp_tool_bridge.server import build_registry, create_app
from mcp_tool_bridge.transport import ProtocolTransportAdapter
from mcp_tool_bridge.validation import ArgumentSchema, ArgumentSpec

WEATHER_URL = "http://weather.test"
EXCHANGE_URL = "http://rates.test/daily"


class FakeProvider:
    """
    Canned upstream responses keyed by URL path, recording every request.
    """

    def __init__(self):
        self.responses: Dict[str, httpx.Response] = {}
        self.requests = []

    def add(self, path: str, status: int = 200, text: str = None, json: Any = None):
        if json is not None:
            self.responses[path] = httpx.Response(status, json=json)
        else:
            self.responses[path] = httpx.Response(status, text=text or "")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get(request.url.path)
        if response is None:
            return httpx.Response(404, text="not mocked")
        return response

    def client(self) -> ProviderClient:
        return ProviderClient(transport=httpx.MockTransport(self.handler))


def text_tool(name: str, fn: Callable[[Dict[str, Any]], str], *specs: ArgumentSpec) -> ToolDefinition:
    """Definition whose async handler returns fn(arguments) as a single text item."""

    async def handler(arguments):
        return [TextContent(type="text", text=fn(arguments))]

    return ToolDefinition(
        name=name,
        description=f"test tool {name}",
        schema=ArgumentSchema.of(*specs),
        handler=handler,
    )


@pytest.fixture
def audit_stream():
    return io.StringIO()


@pytest.fixture
def audit_logger(audit_stream):
    return AuditLogger(stream=audit_stream)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def config():
    return ServerConfig(weather_url=WEATHER_URL, exchange_url=EXCHANGE_URL)


@pytest.fixture
def registry(config, provider):
    return build_registry(config, provider.client())


@pytest.fixture
def dispatcher(registry, audit_logger):
    return Dispatcher(registry, audit_logger=audit_logger)


@pytest.fixture
def adapter(dispatcher):
    return ProtocolTransportAdapter(dispatcher, server_name="test-server", server_version="9.9.9")


@pytest.fixture
def client(config, registry, audit_logger):
    app = create_app(config, registry=registry, audit_logger=audit_logger)
    return TestClient(app)
