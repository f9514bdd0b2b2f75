from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from conftest import InMemoryRegistroRepository, MutableClock

from shift_checkin.common.datetime_utils import DayClock
from shift_checkin.core.enums import ErrorKind
from shift_checkin.core.exceptions import DuplicateError, StorageError, ValidationError
from shift_checkin.registros.service import HealthService, RegistroService, as_row


def test_register_twice_same_day_is_duplicate(repo):
    svc = RegistroService(repo)

    first = svc.register("E001", "manana")
    second = svc.register("E001", "manana")

    assert first.ok
    assert first.value.codigo == "E001"
    assert first.value.hora == "09:15:00"
    assert isinstance(second.error, DuplicateError)
    assert second.error.kind is ErrorKind.DUPLICATE
    assert str(second.error) == "Este empleado ya está registrado hoy"


def test_same_employee_different_shifts_both_succeed(repo):
    svc = RegistroService(repo)

    assert svc.register("E001", "manana").ok
    assert svc.register("E001", "tarde").ok


def test_register_again_next_day_succeeds(repo, clock_source):
    svc = RegistroService(repo)

    assert svc.register("E001", "manana").ok
    clock_source.advance(days=1)
    assert svc.register("E001", "manana").ok


def test_midnight_is_the_day_boundary(repo, clock_source):
    clock_source.current = datetime(2026, 3, 2, 23, 59, 59, tzinfo=clock_source.current.tzinfo)
    svc = RegistroService(repo)

    assert svc.register("E001", "noche").ok
    clock_source.advance(seconds=1)
    assert svc.register("E001", "noche").ok


def test_missing_fields_are_validation_errors_without_storage_call(repo):
    svc = RegistroService(repo)

    for codigo, turno in [("", "manana"), ("E001", ""), (None, "manana"), ("E001", None), ("   ", "manana")]:
        result = svc.register(codigo, turno)
        assert isinstance(result.error, ValidationError)
        assert str(result.error) == "Código y turno son requeridos"

    assert repo.calls == []


def test_numeric_codigo_is_accepted_as_text(repo):
    result = RegistroService(repo).register(1234, "manana")

    assert result.ok
    assert result.value.codigo == "1234"


def test_lost_race_on_insert_becomes_duplicate(repo):
    # Both callers passed the pre-check; only the unique key stops the second.
    repo.exists_today = lambda codigo, turno: False
    svc = RegistroService(repo)

    assert svc.register("E001", "manana").ok
    result = svc.register("E001", "manana")

    assert isinstance(result.error, DuplicateError)
    assert result.error.kind is ErrorKind.DUPLICATE


def test_concurrent_registrations_only_one_succeeds(repo):
    svc = RegistroService(repo)
    barrier = threading.Barrier(8)
    results = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        r = svc.register("E042", "tarde")
        with results_lock:
            results.append(r)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ok = [r for r in results if r.ok]
    failed = [r for r in results if not r.ok]
    assert len(ok) == 1
    assert len(failed) == 7
    assert all(r.error.kind is ErrorKind.DUPLICATE for r in failed)
    assert len(svc.list_today("tarde").value) == 1


def test_storage_failure_is_reported_as_storage_error(storage_down):
    result = RegistroService(storage_down).register("E001", "manana")

    assert isinstance(result.error, StorageError)
    assert result.error.kind is ErrorKind.STORAGE


def test_list_today_filters_shift_and_day_most_recent_first(repo, clock_source):
    svc = RegistroService(repo)

    svc.register("E001", "manana")
    clock_source.advance(days=-1)
    svc.register("E002", "manana")
    clock_source.advance(days=1, minutes=5)
    svc.register("E003", "manana")
    svc.register("E004", "tarde")
    clock_source.advance(minutes=5)
    svc.register("E005", "manana")

    result = svc.list_today("manana")

    assert result.ok
    assert [r.codigo for r in result.value] == ["E005", "E003", "E001"]
    fechas = [r.fecha for r in result.value]
    assert fechas == sorted(fechas, reverse=True)
    assert len(set(fechas)) == len(fechas)


def test_list_today_empty_shift_is_empty_success(repo):
    result = RegistroService(repo).list_today("noche")

    assert result.ok
    assert result.value == []


def test_list_today_requires_turno(repo):
    result = RegistroService(repo).list_today("")

    assert isinstance(result.error, ValidationError)
    assert str(result.error) == "El parámetro turno es requerido"
    assert repo.calls == []


def test_as_row_projects_time_of_day(repo):
    record = RegistroService(repo).register("E001", "manana").value

    assert as_row(record) == {"id": record.id, "codigo": "E001", "turno": "manana", "hora": "09:15:00"}


def test_codes_and_shifts_compare_exactly(repo):
    svc = RegistroService(repo)

    assert svc.register("e001", "tarde").ok
    assert svc.register("E001", "tarde").ok
    assert svc.register("E001", "TARDE").ok
    assert svc.register("E001", "Mañana").ok
    assert svc.register("E001", "manana").ok

    listed = svc.list_today("tarde").value
    assert [(r.codigo, r.turno) for r in listed] == [("E001", "tarde"), ("e001", "tarde")]


def test_listing_across_fall_back_keeps_most_recent_first():
    # 2026-11-01 in New York: 01:30 EDT is earlier than 01:10 EST.
    source = MutableClock(datetime(2026, 11, 1, 5, 30, tzinfo=timezone.utc))
    repo = InMemoryRegistroRepository(DayClock(ZoneInfo("America/New_York"), source))
    svc = RegistroService(repo)

    svc.register("E001", "noche")
    source.advance(minutes=40)
    svc.register("E002", "noche")

    listed = svc.list_today("noche").value
    assert [(r.codigo, r.hora) for r in listed] == [("E002", "01:10:00"), ("E001", "01:30:00")]


def test_health_failure_is_logged_with_traceback(storage_down, caplog):
    with caplog.at_level(logging.ERROR, logger="shift_checkin.registros.service"):
        result = HealthService(storage_down).check()

    assert result.error.kind is ErrorKind.STORAGE
    logged = [r for r in caplog.records if r.name == "shift_checkin.registros.service"]
    assert logged and logged[0].levelno == logging.ERROR
    assert logged[0].exc_info is not None
