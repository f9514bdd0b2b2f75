from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Outcome categories the HTTP layer maps to status codes."""

    VALIDATION = "VALIDATION"
    DUPLICATE = "DUPLICATE"
    STORAGE = "STORAGE"
