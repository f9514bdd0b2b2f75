from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.datetime_utils import DayClock, load_timezone
from .database.bootstrap import as_db_config
from .database.connection import DatabaseConnection
from .registros.export import RegistroExportService
from .registros.mysql_registro_repository import MySQLRegistroRepository
from .registros.repository import RegistroRepository
from .registros.service import HealthService, RegistroService


@dataclass(frozen=True)
class Container:
    registro_service: RegistroService
    export_service: RegistroExportService
    health_service: HealthService

    conn: Optional[DatabaseConnection] = None


def build_services(registros_repo: RegistroRepository, *, conn: Optional[DatabaseConnection] = None) -> Container:
    return Container(
        registro_service=RegistroService(registros_repo),
        export_service=RegistroExportService(registros_repo),
        health_service=HealthService(registros_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, timezone: str) -> Container:
    conn = DatabaseConnection(as_db_config(db_config))
    clock = DayClock(load_timezone(timezone))
    return build_services(MySQLRegistroRepository(conn, clock), conn=conn)
