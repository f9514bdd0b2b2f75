from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import DayClock
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, storage_errors
from .model import Record
from .repository import RegistroRepository


class MySQLRegistroRepository(RegistroRepository):
    def __init__(self, conn_factory: DatabaseConnection, clock: DayClock):
        self._conn_factory = conn_factory
        self._clock = clock

    def exists_today(self, codigo: str, turno: str) -> bool:
        today = self._clock.today()
        with storage_errors("exists_today"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id
                FROM registros
                WHERE codigo=%s AND turno=%s AND dia=%s
                LIMIT 1
                """,
                (codigo, turno, today),
            )
            return fetchone(cur) is not None

    def insert(self, codigo: str, turno: str) -> Record:
        fecha = self._clock.now()
        dia = self._clock.day_of(fecha)
        with storage_errors("insert"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO registros(codigo, turno, fecha, dia)
                VALUES(%s,%s,%s,%s)
                """,
                (codigo, turno, self._clock.to_storage(fecha), dia),
            )
            return Record(id=int(cur.lastrowid), codigo=codigo, turno=turno, fecha=fecha)

    def list_today(self, turno: str) -> Sequence[Record]:
        return self._select_for_day(turno, self._clock.today(), operation="list_today")

    def list_today_for_export(self, turno: str) -> Sequence[Record]:
        return self._select_for_day(turno, self._clock.today(), operation="list_today_for_export")

    def ping(self) -> None:
        with storage_errors("ping"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS ok")
            fetchall(cur)

    def _select_for_day(self, turno: str, dia: date, *, operation: str) -> Sequence[Record]:
        with storage_errors(operation), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, codigo, turno, fecha
                FROM registros
                WHERE turno=%s AND dia=%s
                ORDER BY fecha DESC, id DESC
                """,
                (turno, dia),
            )
            rows = fetchall(cur)
            return [
                Record(
                    id=int(r["id"]),
                    codigo=r["codigo"],
                    turno=r["turno"],
                    fecha=self._clock.from_storage(r["fecha"]),
                )
                for r in rows
            ]
