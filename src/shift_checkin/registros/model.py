from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import format_fecha_hora, format_hora


@dataclass(frozen=True)
class Record:
    """Domain entity: one employee check-in for a shift.

    ``fecha`` is timezone-aware, expressed in the application time zone.
    """

    id: int
    codigo: str
    turno: str
    fecha: datetime

    @property
    def hora(self) -> str:
        return format_hora(self.fecha)

    @property
    def fecha_hora(self) -> str:
        return format_fecha_hora(self.fecha)
