"""Exception hierarchy raised by the Untappd client."""

from __future__ import annotations

from typing import Any


class UntappdError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class MissingIdentity(UntappdError):
    """No username was given and no authenticated user is configured."""

    def __init__(self, message: str = "username parameter or Untappd authentication parameters must be set") -> None:
        super().__init__(message)


class InvalidArgument(UntappdError):
    """A required argument is empty or an enumerated one is out of range."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class AuthenticationRequired(UntappdError):
    """The endpoint needs an authenticated user and none is configured."""

    def __init__(self, message: str = "method requires Untappd user authentication which is not set") -> None:
        super().__init__(message)


class TransportError(UntappdError):
    """The HTTP request itself failed before a body was received."""


class MalformedResponse(UntappdError):
    """The response body is not a JSON object carrying ``http_code``."""

    def __init__(self, message: str = "error parsing response from server") -> None:
        super().__init__(message)


class ServiceError(UntappdError):
    """The service answered with a non-success ``http_code``."""

    def __init__(self, code: int, message: str | None) -> None:
        text = f"Untappd service error {code}"
        if message is not None:
            text = f"{text}: {message}"
        super().__init__(text, {"http_code": code, "error": message})
        self.code = code
        self.error = message


class UnsupportedOperation(UntappdError, NotImplementedError):
    """Write endpoints the service has not documented for this API version."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} is not supported by this client", {"operation": operation})
        self.operation = operation
