from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.attendance_engine.attendance_engine.attendance.inflight import InFlightRegistry
from src.attendance_engine.attendance_engine.attendance.model import AttendanceRecord
from src.attendance_engine.attendance_engine.attendance.service import AttendanceService
from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus
from src.attendance_engine.attendance_engine.core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    NotCheckedIn,
    OperationInFlight,
    StoreUnavailable,
    ToggleFailed,
)


@pytest.fixture
def svc(store, directory, clock):
    return AttendanceService(store, directory, clock=clock)


def test_load_today_defaults_missing_employees_to_absent(svc, store, fixed_now):
    store.add(
        AttendanceRecord(
            employee_id="e1",
            work_date=fixed_now.date(),
            check_in=fixed_now,
            status=AttendanceStatus.WORKING,
        )
    )

    day_map = svc.load_today()

    assert len(day_map) == 3
    assert day_map["e1"].status == AttendanceStatus.WORKING
    assert day_map["e2"].status == AttendanceStatus.ABSENT
    assert store.calls == [("query_range", fixed_now.date(), fixed_now.date(), None)]


def test_toggle_sequence(svc, store, clock):
    observed: list[Exception] = []

    def second_click():
        try:
            svc.request_check_in("e1")
        except OperationInFlight as e:
            observed.append(e)

    assert svc.status_of("e1") == AttendanceStatus.ABSENT

    # A second click arrives while the refresh after check-in is still running.
    store.on_query = second_click
    record = svc.request_check_in("e1")
    store.on_query = None

    assert record.status == AttendanceStatus.WORKING
    assert svc.status_of("e1") == AttendanceStatus.WORKING
    assert observed and all(isinstance(e, OperationInFlight) for e in observed)
    assert [c for c in store.mutations()] == [("check_in", "e1")]

    clock.now = clock.now + timedelta(hours=8, minutes=30)
    record = svc.request_check_out("e1")

    assert record.status == AttendanceStatus.PRESENT
    assert record.working_minutes == 510

    with pytest.raises(AlreadyCheckedOut):
        svc.request_check_out("e1")
    assert store.mutations() == [("check_in", "e1"), ("check_out", "e1")]


def test_check_in_while_working_is_rejected_without_store_call(svc, store):
    svc.request_check_in("e2")

    with pytest.raises(AlreadyCheckedIn):
        svc.request_check_in("e2")

    assert store.mutations() == [("check_in", "e2")]


def test_check_out_while_absent_is_rejected_without_store_call(svc, store):
    with pytest.raises(NotCheckedIn):
        svc.request_check_out("e3")

    assert store.mutations() == []


def test_refresh_after_toggle_reloads_today_and_active_week(svc, store, fixed_now):
    svc.load_week(-1)
    store.calls.clear()

    svc.request_check_in("e1")

    queries = [c for c in store.calls if c[0] == "query_range"]
    assert ("query_range", fixed_now.date(), fixed_now.date(), None) in queries
    assert ("query_range", date(2024, 6, 3), date(2024, 6, 9), None) in queries
    assert svc.week.window.week_offset == -1


def test_refresh_loads_current_week_when_none_is_active(svc, store):
    svc.request_check_in("e1")

    assert svc.week.window.start == date(2024, 6, 10)
    assert [r.employee_id for r in svc.week.records] == ["e1"]


def test_store_failure_keeps_previous_state(svc, store):
    svc.load_today()
    svc.load_week()
    before_map = svc.day_map
    before_week = svc.week
    store.fail_with = StoreUnavailable("backend down")

    with pytest.raises(ToggleFailed) as exc_info:
        svc.request_check_in("e1")

    assert str(exc_info.value) == "backend down"
    assert isinstance(exc_info.value.error, StoreUnavailable)
    assert svc.day_map == before_map
    assert svc.week is before_week
    assert svc.status_of("e1") == AttendanceStatus.ABSENT


def test_failed_refresh_leaves_day_map_and_week_untouched(svc, store):
    svc.load_today()
    svc.load_week()
    before_map = svc.day_map
    before_week = svc.week
    store.check_in("e1")

    read_range = store.query_range

    def week_read_fails(from_date, to_date, employee_id=None):
        if from_date != to_date:
            raise StoreUnavailable("week read failed")
        return read_range(from_date, to_date, employee_id)

    store.query_range = week_read_fails

    with pytest.raises(StoreUnavailable, match="week read failed"):
        svc.refresh()

    assert svc.day_map == before_map
    assert svc.day_map["e1"].status == AttendanceStatus.ABSENT
    assert svc.week is before_week


def test_in_flight_flag_is_released_after_failure(svc, store):
    store.fail_with = StoreUnavailable("backend down")
    with pytest.raises(ToggleFailed):
        svc.request_check_in("e1")

    store.fail_with = None
    assert not svc.is_in_flight("e1")
    assert svc.request_check_in("e1").status == AttendanceStatus.WORKING


def test_store_conflict_is_wrapped_with_its_message(svc, store, fixed_now):
    # The store already has a check-in the local view has not seen yet.
    svc.load_today()
    store.add(
        AttendanceRecord(employee_id="e1", work_date=fixed_now.date(), check_in=fixed_now, status=AttendanceStatus.WORKING)
    )

    with pytest.raises(ToggleFailed) as exc_info:
        svc.request_check_in("e1")

    assert str(exc_info.value) == "Already checked in"
    assert isinstance(exc_info.value.error, AlreadyCheckedIn)
    assert svc.status_of("e1") == AttendanceStatus.ABSENT


def test_toggle_walks_absent_working_present(svc, clock):
    assert svc.toggle("e1").status == AttendanceStatus.WORKING

    clock.now = clock.now + timedelta(minutes=65)
    assert svc.toggle("e1").status == AttendanceStatus.PRESENT

    with pytest.raises(AlreadyCheckedOut):
        svc.toggle("e1")


def test_in_flight_registry_is_shared_between_services(store, directory, clock):
    registry = InFlightRegistry()
    first = AttendanceService(store, directory, inflight=registry, clock=clock)
    second = AttendanceService(store, directory, inflight=registry, clock=clock)

    with registry.hold("e1", clock().date()):
        with pytest.raises(OperationInFlight):
            second.request_check_in("e1")
        assert first.is_in_flight("e1")

    assert store.mutations() == []


def test_day_rollover_reloads_the_day_map(svc, store, clock):
    svc.request_check_in("e1")
    assert svc.status_of("e1") == AttendanceStatus.WORKING

    clock.now = datetime(2024, 6, 13, 8, 0)

    assert svc.status_of("e1") == AttendanceStatus.ABSENT


def test_week_offset_is_clamped(svc):
    view = svc.load_week(-40)

    assert view.window.week_offset == -11
    assert view.window.start == date(2024, 3, 25)


def test_today_ui_rows(svc, clock):
    svc.request_check_in("e2")

    rows = {r["employee_id"]: r for r in svc.get_today_ui()}

    assert rows["e1"]["action"] == "Check In"
    assert rows["e1"]["check_in"] == "—"
    assert rows["e1"]["working_hours"] == "—"
    assert rows["e2"]["status"] == "working"
    assert rows["e2"]["status_label"] == "Working"
    assert rows["e2"]["action"] == "Check Out"
    assert rows["e2"]["check_in"] == "08:30:00"
    assert [r["name"] for r in svc.get_today_ui()] == ["Alice", "Bob", "Chloe"]


def test_week_ui_is_sorted_by_date(svc, store, clock):
    for day in (date(2024, 6, 11), date(2024, 6, 10)):
        store.add(
            AttendanceRecord(
                employee_id="e1",
                work_date=day,
                check_in=datetime.combine(day, datetime.min.time()).replace(hour=9),
                check_out=datetime.combine(day, datetime.min.time()).replace(hour=17),
                working_minutes=480,
                status=AttendanceStatus.PRESENT,
                employee_name="Alice",
            )
        )

    ui = svc.get_week_ui(svc.load_week())

    assert ui["label"] == "Jun 10 - Jun 16"
    assert ui["days"] == [f"2024-06-{d}" for d in range(10, 17)]
    assert ui["next_offset"] is None
    assert ui["previous_offset"] == -1
    assert [i["date"] for i in ui["items"]] == ["2024-06-10", "2024-06-11"]
    assert ui["items"][0]["working_hours"] == "8h 0m"
