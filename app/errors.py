import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

DEFAULT_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.VALIDATION: "Validation failed",
    ErrorKind.UNAUTHORIZED: "Access denied",
    ErrorKind.FORBIDDEN: "Forbidden",
    ErrorKind.CONFLICT: "Resource conflict",
    ErrorKind.INTERNAL: "Internal server error",
}


class ApiError(Exception):
    """A request failure tagged with its kind.

    The HTTP status is derived from the kind, so callers never subclass this
    to change behaviour. ``details`` is only meaningful for validation
    failures and keeps the order in which violations were found.
    """

    def __init__(self, kind: ErrorKind, message: Optional[str] = None, details: Optional[List[str]] = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.details = list(details) if details else []
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @classmethod
    def not_found(cls, message: Optional[str] = None) -> "ApiError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def validation(cls, message: Optional[str] = None, details: Optional[List[str]] = None) -> "ApiError":
        return cls(ErrorKind.VALIDATION, message, details)

    @classmethod
    def unauthorized(cls, message: Optional[str] = None) -> "ApiError":
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def forbidden(cls, message: Optional[str] = None) -> "ApiError":
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def conflict(cls, message: Optional[str] = None) -> "ApiError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def internal(cls, message: Optional[str] = None) -> "ApiError":
        return cls(ErrorKind.INTERNAL, message)

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.value!r}, message={self.message!r})"


def as_api_error(exc: BaseException) -> ApiError:
    """Coerce any exception into the taxonomy; unknown failures become internal."""
    if isinstance(exc, ApiError):
        return exc
    return ApiError.internal()


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def error_envelope(exc: BaseException, include_stack: bool = False) -> Dict[str, Any]:
    """Build the uniform JSON body returned for every failed request."""
    err = as_api_error(exc)
    body: Dict[str, Any] = {"success": False, "error": err.message}
    if err.details:
        body["details"] = err.details
    if include_stack and err.kind is ErrorKind.INTERNAL:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    body["timestamp"] = utc_timestamp()
    return body
