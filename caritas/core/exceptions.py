"""
Domain exceptions.

Every error raised on purpose inside the service derives from
CaritasException and carries a user-facing ``message`` plus a ``details``
dict for log context. Only ClientPreconditionError ever reaches a client
as an exception; the rest are turned into data at the nearest boundary.

Dependencies: None (pure domain layer)
System role: Shared error vocabulary
"""

from typing import Any


class CaritasException(Exception):
    """Root of the service's exception tree."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class ClientPreconditionError(CaritasException):
    """
    Request rejected before any outbound call.

    ``message`` is shown to the user verbatim as the 400 body's ``error``.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        context = dict(details or {})
        if field:
            context["field"] = field
        super().__init__(message, context)
        self.field = field


class UpstreamError(CaritasException):
    """The function host or a provider answered, but not with 2xx."""

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: str = "",
        body: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, {**(details or {}), "status_code": status_code})
        self.status_code = status_code
        self.status_text = status_text
        self.body = body


class TransportError(CaritasException):
    """The function host could not be reached or timed out."""


class PersistenceError(CaritasException):
    """A history row could not be written. Logged, never surfaced."""


class ConfigurationError(CaritasException):
    """Required settings are missing or invalid at startup."""
