from mcp_tool_bridge.config import ServerConfig


def test_defaults(monkeypatch):
    for name in ("PORT", "HOST", "WEATHER_API_URL", "EXCHANGE_API_URL", "MAX_BODY_BYTES",
                 "AUDIT_LOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    config = ServerConfig.from_environment()
    assert config.port == 3000
    assert config.host == "0.0.0.0"
    assert config.weather_url == "https://wttr.in"
    assert config.max_body_bytes == 1024 * 1024
    assert config.audit_log_path is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("WEATHER_API_URL", "http://localhost:9000/")
    monkeypatch.setenv("MCP_SERVER_NAME", "weather-bridge")
    config = ServerConfig.from_environment()
    assert config.port == 8080
    assert config.weather_url == "http://localhost:9000"
    assert config.server_name == "weather-bridge"


def test_invalid_port_falls_back(monkeypatch, capsys):
    monkeypatch.setenv("PORT", "eighty")
    assert ServerConfig.from_environment().port == 3000
    assert "PORT='eighty' is not an integer" in capsys.readouterr().err
