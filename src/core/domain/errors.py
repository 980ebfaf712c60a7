"""Taxonomía de errores de la API.

Por qué un único tipo:
- La UI solo necesita un `code` estable y un `message` presentable.
- Fallos de red, estados no-2xx y cuerpos malformados terminan todos aquí.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ApiErrorCode(str, Enum):
    """Closed set of failure codes surfaced to callers."""

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    PURCHASE_REQUIRED = "PURCHASE_REQUIRED"
    EXPIRED = "EXPIRED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    @classmethod
    def coerce(cls, value: str) -> "ApiErrorCode | str":
        """Return the enum member for `value`, or `value` itself when unknown.

        Servers may send codes this client does not know yet; they are kept
        verbatim instead of being collapsed.
        """

        try:
            return cls(value)
        except ValueError:
            return value


class ApiError(Exception):
    """The only failure shape raised by the API client.

    Attributes:
        code: An `ApiErrorCode` (or an unrecognized server code, verbatim).
        message: Human readable text, always present.
        status: HTTP status when a response was received.
        details: Raw response body, or the exception that prevented one.
    """

    def __init__(
        self,
        code: ApiErrorCode | str,
        message: str,
        *,
        status: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status
        self.details = details

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (
            self.code == other.code
            and self.message == other.message
            and self.status == other.status
            and self.details == other.details
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ApiError(code={str(self.code)!r}, message={self.message!r}, "
            f"status={self.status!r})"
        )

    def __str__(self) -> str:
        return self.message

    @property
    def code_value(self) -> str:
        return self.code.value if isinstance(self.code, ApiErrorCode) else str(self.code)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view (details are stringified when not serializable)."""

        details = self.details
        if isinstance(details, BaseException):
            details = f"{type(details).__name__}: {details}"
        return {
            "code": self.code_value,
            "message": self.message,
            "status": self.status,
            "details": details,
        }
