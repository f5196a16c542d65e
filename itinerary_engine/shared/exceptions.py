"""Shared (non-domain) exceptions."""


class ToolError(Exception):
    """Tool invocation failed."""

    def __init__(self, tool: str, message: str):
        self.tool = tool
        super().__init__(f"[{tool}] {message}")


class ExternalServiceError(Exception):
    """External service call failed."""
