"""Server configuration loaded from environment variables."""

import os
import sys
from dataclasses import dataclass
from typing import Optional

DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: {name}={raw!r} is not an integer, using {default}", file=sys.stderr)
        return default


@dataclass
class ServerConfig:
    """Runtime settings for the HTTP server and its tools."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    server_name: str = "mcp-server"
    server_version: str = "1.0.0"
    weather_url: str = "https://wttr.in"
    exchange_url: str = "https://www.floatrates.com/daily"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    audit_log_path: Optional[str] = None

    @classmethod
    def from_environment(cls) -> "ServerConfig":
        """
        Load configuration from environment variables.

        Returns:
            ServerConfig with defaults for anything unset
        """
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_from_env("PORT", DEFAULT_PORT),
            server_name=os.getenv("MCP_SERVER_NAME", "mcp-server"),
            server_version=os.getenv("MCP_SERVER_VERSION", "1.0.0"),
            weather_url=os.getenv("WEATHER_API_URL", "https://wttr.in").rstrip("/"),
            exchange_url=os.getenv(
                "EXCHANGE_API_URL", "https://www.floatrates.com/daily"
            ).rstrip("/"),
            max_body_bytes=_int_from_env("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
            audit_log_path=os.getenv("AUDIT_LOG_PATH") or None,
        )
