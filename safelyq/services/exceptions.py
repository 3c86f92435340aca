from typing import Any, Dict, List

UNREACHABLE_MESSAGE = "Unable to reach the SafelyQ service. Please try again later."


class ServiceError(Exception):
    """Base exception for service layer failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class TransportError(ServiceError):
    """Raised when the remote SafelyQ endpoints cannot be reached."""


class ResponseParseError(ServiceError):
    """Raised when a remote response body is not valid JSON."""

    def __init__(self, message: str, body: str | None = None, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.body = body


class UnknownToolError(ServiceError):
    """Raised when dispatch is asked for a tool that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolArgumentError(ServiceError):
    """Raised when tool arguments do not match the tool's argument schema."""

    def __init__(
        self,
        name: str,
        errors: List[Dict[str, Any]],
        *,
        cause: Exception | None = None,
    ):
        super().__init__(f"Invalid arguments for tool '{name}'", cause=cause)
        self.name = name
        self.errors = errors
