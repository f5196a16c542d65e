"""Structured logging: one JSON object per line."""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional


class StructuredLogger:
    """Writes JSON lines tagged with a trace id."""

    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr
        self._timers: dict[str, float] = {}

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            self._output.write(line + "\n")
            self._output.flush()
        except (OSError, ValueError) as exc:
            # Last-resort fallback when the configured stream is closed or broken.
            fallback = {
                "event": "logger_internal_error",
                "trace_id": self.trace_id,
                "timestamp": time.time(),
                "error": str(exc),
            }
            sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")

    def node_start(self, node_name: str, **extra: Any) -> None:
        self._timers[node_name] = time.time()
        self._emit({"event": "node_start", "node": node_name, **extra})

    def node_end(
        self,
        node_name: str,
        *,
        changes_count: int = 0,
        warnings_count: int = 0,
        **extra: Any,
    ) -> None:
        start = self._timers.pop(node_name, time.time())
        duration_ms = round((time.time() - start) * 1000, 1)
        self._emit({
            "event": "node_end",
            "node": node_name,
            "duration_ms": duration_ms,
            "changes_count": changes_count,
            "warnings_count": warnings_count,
            **extra,
        })

    def tool_call(self, tool_name: str, **extra: Any) -> None:
        self._emit({"event": "tool_call", "tool": tool_name, **extra})

    def error(self, node_name: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "node": node_name, "error": error, **extra})

    def warning(self, node_name: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "node": node_name, "message": message, **extra})


_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    global _logger
    if _logger is None or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id)
    return _logger


__all__ = ["StructuredLogger", "get_logger"]
