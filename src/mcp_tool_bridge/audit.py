"""Audit logging for tool calls and HTTP requests."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class AuditLogger:
    """Audit log for tool dispatch and HTTP access."""

    def __init__(self, log_path: Optional[str] = None, stream=None):
        """
        Initialize audit logger.

        Args:
            log_path: Path to audit log file (default: write to stderr)
            stream: Stream used when no log_path is given (default: sys.stderr)
        """
        self.log_path = Path(log_path) if log_path else None
        self._stream = stream

    def _write(self, line: str) -> None:
        if self.log_path is None:
            stream = self._stream if self._stream is not None else sys.stderr
            print(line, file=stream, flush=True)
            return

        try:
            with open(self.log_path, "a") as f:
                f.write(line + "\n")
        except OSError as e:
            print(f"Warning: Could not write to audit log: {e}", file=sys.stderr)

    def log(self, action: str, tool: str, details: str, source: str = "dispatcher"):
        """
        Write audit log entry.

        Args:
            action: Outcome (CALL_SUCCESS, CALL_FAILED, UNKNOWN_TOOL, INVALID_ARGS)
            tool: Tool name
            details: Additional details
            source: Component emitting the entry
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        self._write(
            "[{0}] SOURCE={1} ACTION={2} TOOL={3} DETAILS={4}".format(
                timestamp, source, action, tool, details
            )
        )

    def log_request(self, method: str, path: str, status: int, elapsed_ms: float):
        """Write one access line, e.g. ``POST /mcp 200 3.214 ms``."""
        self._write(f"{method} {path} {status} {elapsed_ms:.3f} ms")
