from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainError):
    """Raised when a required field is missing or empty."""

    kind = ErrorKind.VALIDATION


class DuplicateError(DomainError):
    """Raised when an employee already checked in today for the same shift."""

    kind = ErrorKind.DUPLICATE


class StorageError(DomainError):
    """Raised when the database is unreachable or a query fails."""

    kind = ErrorKind.STORAGE


class ConstraintViolation(Exception):
    """Raised by storage when the (codigo, turno, dia) unique key rejects an insert."""
