from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Sequence

from ..common.datetime_utils import utc_now
from ..common.validators import require_non_empty
from ..core.exceptions import ConstraintViolation, DuplicateError, StorageError, ValidationError
from ..core.result import Result
from .model import Record
from .repository import RegistroRepository

logger = logging.getLogger(__name__)

CAMPOS_REQUERIDOS = "Código y turno son requeridos"
TURNO_REQUERIDO = "El parámetro turno es requerido"
YA_REGISTRADO = "Este empleado ya está registrado hoy"


def validate_turno(turno) -> str:
    return require_non_empty(turno, TURNO_REQUERIDO)


def as_row(record: Record) -> dict:
    """Public projection used by the JSON endpoints."""
    return {
        "id": record.id,
        "codigo": record.codigo,
        "turno": record.turno,
        "hora": record.hora,
    }


class RegistroService:
    """Check-in registration and today's listing for a shift."""

    def __init__(self, registros: RegistroRepository):
        self._registros = registros

    def register(self, codigo, turno) -> Result[Record]:
        try:
            codigo = require_non_empty(codigo, CAMPOS_REQUERIDOS)
            turno = require_non_empty(turno, CAMPOS_REQUERIDOS)
        except ValidationError as exc:
            return Result.failure(exc)

        try:
            # Fast path only; the unique key on insert is what actually guards duplicates.
            if self._registros.exists_today(codigo, turno):
                logger.debug("Duplicate check-in rejected codigo=%s turno=%s", codigo, turno)
                return Result.failure(DuplicateError(YA_REGISTRADO))

            record = self._registros.insert(codigo, turno)
        except ConstraintViolation:
            logger.info("Concurrent duplicate check-in rejected codigo=%s turno=%s", codigo, turno)
            return Result.failure(DuplicateError(YA_REGISTRADO))
        except StorageError as exc:
            logger.exception("Check-in failed codigo=%s turno=%s", codigo, turno)
            return Result.failure(exc)

        logger.info("Check-in registered id=%s codigo=%s turno=%s hora=%s", record.id, codigo, turno, record.hora)
        return Result.success(record)

    def list_today(self, turno) -> Result[Sequence[Record]]:
        try:
            turno = validate_turno(turno)
        except ValidationError as exc:
            return Result.failure(exc)

        try:
            records = self._registros.list_today(turno)
        except StorageError as exc:
            logger.exception("Listing failed turno=%s", turno)
            return Result.failure(exc)

        return Result.success(list(records))


class HealthService:
    def __init__(self, registros: RegistroRepository, *, now_fn: Callable[[], datetime] = utc_now):
        self._registros = registros
        self._now_fn = now_fn

    def check(self) -> Result[dict]:
        try:
            self._registros.ping()
        except StorageError as exc:
            logger.exception("Database health check failed")
            return Result.failure(exc)

        timestamp = self._now_fn().astimezone(timezone.utc).isoformat(timespec="milliseconds")
        return Result.success(
            {
                "status": "OK",
                "database": "Connected",
                "timestamp": timestamp.replace("+00:00", "Z"),
            }
        )
