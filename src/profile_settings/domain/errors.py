"""Failure taxonomy for remote profile operations."""

from enum import StrEnum


class FailureKind(StrEnum):
    TRANSPORT = "transport"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    SERVER = "server"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN = "unknown"


_STATUS_KINDS = {
    400: FailureKind.VALIDATION,
    404: FailureKind.NOT_FOUND,
    409: FailureKind.CONFLICT,
}


def kind_for_status(status_code: int) -> FailureKind:
    """Classify an HTTP error status."""
    if status_code in _STATUS_KINDS:
        return _STATUS_KINDS[status_code]
    if status_code >= 500:
        return FailureKind.SERVER
    return FailureKind.UNKNOWN


class ProfileApiError(RuntimeError):
    """Raised when a remote profile operation fails."""

    def __init__(
        self,
        message: str,
        *,
        kind: FailureKind,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
