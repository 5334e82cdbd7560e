import pytest

from mcp_tool_bridge.errors import DuplicateToolError, RegistrySealedError, UnknownToolError
from mcp_tool_bridge.registry import ToolRegistry
from mcp_tool_bridge.validation import ArgumentSpec
from tests.conftest import text_tool


def test_lookup_returns_the_registered_object():
    echo = text_tool("echo", lambda a: a["msg"], ArgumentSpec("msg"))
    upper = text_tool("upper", lambda a: a["msg"].upper(), ArgumentSpec("msg"))
    registry = ToolRegistry.from_definitions([echo, upper])

    assert registry.lookup("echo") is echo
    assert registry.lookup("upper") is upper
    assert registry.names() == ["echo", "upper"]
    assert len(registry) == 2
    assert "echo" in registry


def test_duplicate_name_is_rejected():
    registry = ToolRegistry()
    registry.register(text_tool("echo", lambda a: ""))
    with pytest.raises(DuplicateToolError):
        registry.register(text_tool("echo", lambda a: "other"))


def test_unknown_name_raises():
    registry = ToolRegistry.from_definitions([])
    with pytest.raises(UnknownToolError) as exc:
        registry.lookup("nope")
    assert str(exc.value) == "Tool nope not found"


def test_sealed_registry_is_read_only():
    registry = ToolRegistry.from_definitions([text_tool("echo", lambda a: "")])
    assert registry.sealed
    with pytest.raises(RegistrySealedError):
        registry.register(text_tool("late", lambda a: ""))
    with pytest.raises(TypeError):
        registry.tools["late"] = None


def test_built_in_tools_in_registration_order(registry):
    assert registry.names() == ["get_weather", "get_exchange_rate"]
    tool = registry.lookup("get_exchange_rate").to_tool()
    listed = tool.model_dump(mode="json", by_alias=True, exclude_none=True)
    assert listed["name"] == "get_exchange_rate"
    assert listed["inputSchema"]["required"] == ["from", "to"]
