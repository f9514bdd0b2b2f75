from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from ..core.constants import EXPORT_COLUMNS, EXPORT_SHEET_NAME, XLSX_MIMETYPE
from ..core.exceptions import StorageError, ValidationError
from ..core.result import Result
from .repository import RegistroRepository
from .service import validate_turno

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpreadsheetExport:
    content: bytes
    filename: str
    mimetype: str = XLSX_MIMETYPE


def build_workbook(rows: Iterable[dict], *, sheet_name: str = EXPORT_SHEET_NAME) -> bytes:
    """Write rows into a single-sheet xlsx workbook held in memory."""
    df = pd.DataFrame(list(rows), columns=list(EXPORT_COLUMNS))

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


class RegistroExportService:
    """Today's check-ins for a shift as a downloadable spreadsheet."""

    def __init__(self, registros: RegistroRepository):
        self._registros = registros

    def export(self, turno) -> Result[SpreadsheetExport]:
        try:
            turno = validate_turno(turno)
        except ValidationError as exc:
            return Result.failure(exc)

        try:
            records = self._registros.list_today_for_export(turno)
        except StorageError as exc:
            logger.exception("Export failed turno=%s", turno)
            return Result.failure(exc)

        # Rows keep the query order; only the timestamp projection differs from the listing.
        rows = [{"codigo": r.codigo, "turno": r.turno, "fecha": r.fecha_hora} for r in records]
        content = build_workbook(rows)

        logger.info("Exported %d check-ins turno=%s", len(rows), turno)
        return Result.success(SpreadsheetExport(content=content, filename=f"registros_{turno}.xlsx"))
