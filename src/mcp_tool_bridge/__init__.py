"""mcp-tool-bridge: schema-typed tools over JSON-RPC and a simplified REST endpoint."""

import sys

__version__ = "1.0.0"


def run():
    """Console script entry point: serve the app with uvicorn."""
    import uvicorn

    from .config import ServerConfig
    from .server import create_app

    config = ServerConfig.from_environment()
    app = create_app(config)
    print(f"MCP server listening on http://localhost:{config.port}", file=sys.stderr)
    try:
        uvicorn.run(app, host=config.host, port=config.port, log_level="warning")
    except KeyboardInterrupt:
        print("\nMCP server stopped.", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)


__all__ = ["run", "__version__"]
