from __future__ import annotations

from typing import Protocol, Sequence

from .model import Record


class RegistroRepository(Protocol):
    """Storage for check-ins.

    All record operations scope "today" through the same clock. ``insert``
    must reject a second row for the same (codigo, turno, day) atomically by
    raising ``ConstraintViolation``; failures reaching the store raise
    ``StorageError``.
    """

    def exists_today(self, codigo: str, turno: str) -> bool:
        raise NotImplementedError

    def insert(self, codigo: str, turno: str) -> Record:
        raise NotImplementedError

    def list_today(self, turno: str) -> Sequence[Record]:
        """Today's records for ``turno``, most recent first."""

        raise NotImplementedError

    def list_today_for_export(self, turno: str) -> Sequence[Record]:
        raise NotImplementedError

    def ping(self) -> None:
        raise NotImplementedError
