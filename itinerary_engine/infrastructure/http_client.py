"""HTTP client used for every outbound collaborator call.

Wraps httpx so adapters only ever see ``ToolError`` and parsed JSON.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from itinerary_engine.shared.exceptions import ToolError


class HttpClient:
    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_retries: int = 0,
        tool_name: str = "http",
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._timeout = timeout
        self._max_retries = max_retries
        self._tool_name = tool_name
        self._headers = dict(headers or {})
        self._transport = transport

    def get(
        self,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        Perform a GET request and return the decoded JSON body.
        Transport and status errors are raised as ToolError.
        """
        last_error: Optional[ToolError] = None
        merged = {**self._headers, **(headers or {})}

        for attempt in range(1, self._max_retries + 2):
            try:
                with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                    resp = client.get(url, params=params, headers=merged)
                resp.raise_for_status()
                return resp.json()
            except httpx.HTTPStatusError as e:
                last_error = ToolError(self._tool_name, f"HTTP {e.response.status_code}")
            except httpx.TimeoutException:
                last_error = ToolError(self._tool_name, f"request timed out after {self._timeout}s (attempt {attempt})")
            except httpx.HTTPError as e:
                last_error = ToolError(self._tool_name, f"request failed: {e}")
            except ValueError as e:
                last_error = ToolError(self._tool_name, f"invalid JSON response: {e}")

            if attempt <= self._max_retries:
                time.sleep(0.5 * attempt)

        raise last_error  # type: ignore[misc]


__all__ = ["HttpClient"]
