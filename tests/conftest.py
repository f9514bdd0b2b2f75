from __future__ import annotations

import threading
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest

from shift_checkin import create_app
from shift_checkin.common.datetime_utils import DayClock
from shift_checkin.container import build_services
from shift_checkin.core.exceptions import ConstraintViolation, StorageError
from shift_checkin.registros.model import Record


class MutableClock:
    """Clock source tests can move forward, e.g. across midnight."""

    def __init__(self, now: datetime):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class InMemoryRegistroRepository:
    """Mirrors the MySQL table: exact-match unique key on (codigo, turno, dia),
    rows ordered by the stored UTC instant.
    """

    def __init__(self, clock: DayClock):
        self._clock = clock
        self._rows: list[tuple[Record, date]] = []
        self._keys: set[tuple[str, str, date]] = set()
        self._lock = threading.Lock()
        self._next_id = 1
        self.calls: list[str] = []
        self.fail_with: Optional[Exception] = None

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def exists_today(self, codigo: str, turno: str) -> bool:
        self._enter("exists_today")
        with self._lock:
            return (codigo, turno, self._clock.today()) in self._keys

    def insert(self, codigo: str, turno: str) -> Record:
        self._enter("insert")
        fecha = self._clock.now()
        key = (codigo, turno, self._clock.day_of(fecha))
        with self._lock:
            if key in self._keys:
                raise ConstraintViolation(f"Duplicate entry {key!r}")
            record = Record(id=self._next_id, codigo=codigo, turno=turno, fecha=fecha)
            self._next_id += 1
            self._keys.add(key)
            self._rows.append((record, key[2]))
            return record

    def list_today(self, turno: str):
        self._enter("list_today")
        return self._select(turno)

    def list_today_for_export(self, turno: str):
        self._enter("list_today_for_export")
        return self._select(turno)

    def ping(self) -> None:
        self._enter("ping")

    def _select(self, turno: str):
        today = self._clock.today()
        with self._lock:
            items = [r for r, dia in self._rows if r.turno == turno and dia == today]
        items.sort(key=lambda r: (self._clock.to_storage(r.fecha), r.id), reverse=True)
        return items


@pytest.fixture
def clock_source() -> MutableClock:
    return MutableClock(datetime(2026, 3, 2, 9, 15, 0, tzinfo=timezone.utc))


@pytest.fixture
def clock(clock_source) -> DayClock:
    return DayClock(timezone.utc, clock_source)


@pytest.fixture
def repo(clock) -> InMemoryRegistroRepository:
    return InMemoryRegistroRepository(clock)


@pytest.fixture
def container(repo):
    return build_services(repo)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage_down(repo):
    repo.fail_with = StorageError("Lost connection to MySQL server during query")
    return repo
