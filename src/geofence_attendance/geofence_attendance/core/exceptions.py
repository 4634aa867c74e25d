from __future__ import annotations

from .enums import FailureKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AttendanceError(DomainError):
    """An expected attendance outcome that is surfaced to the kiosk as a failure."""

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class DirectoryUnavailableError(DomainError):
    """Raised when the staff directory or location source cannot be read."""


class FaceServiceUnavailableError(DomainError):
    """Raised when the face-recognition service is unreachable or returns an error."""


class StorageUnavailableError(DomainError):
    """Raised when the attendance ledger store cannot be read or written."""
