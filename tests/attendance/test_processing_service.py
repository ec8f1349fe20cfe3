from datetime import date, datetime, timezone

import pytest

from src.attendance_resolution.attendance_resolution.attendance.service import (
    AttendanceProcessingService,
    punch_search_window,
)
from src.attendance_resolution.attendance_resolution.core.enums import AttendanceStatus
from src.attendance_resolution.attendance_resolution.core.exceptions import ProcessingError, ValidationError


class FakeEmployees:
    def __init__(self, employees):
        self._employees = list(employees)

    def list_all(self):
        return list(self._employees)


class FakePunches:
    def __init__(self, punches):
        self._punches = list(punches)
        self.calls = []

    def list_between(self, *, start, end):
        self.calls.append((start, end))
        return [p for p in self._punches if start <= p.punch_datetime <= end]


class FakeRules:
    def list_all(self):
        return []


class FakeAdjustments:
    def list_between(self, *, start=None, end=None):
        return []


class FakeLeaves:
    def list_leaves(self):
        return []

    def list_official_holidays(self):
        return []


class FakeAttendance:
    def __init__(self):
        self.replaced = []

    def replace_range(self, *, start, end, records, employee_codes=None):
        self.replaced.append((start, end, list(records), employee_codes))
        return len(records)

    def list_range(self, *, start, end, employee_code=None, limit=0, offset=0):
        self.list_args = dict(start=start, end=end, employee_code=employee_code, limit=limit, offset=offset)
        return [], 0


def _service(employees, punches=(), attendance=None):
    return AttendanceProcessingService(
        employees=FakeEmployees(employees),
        punches=FakePunches(punches),
        rules=FakeRules(),
        adjustments=FakeAdjustments(),
        leaves=FakeLeaves(),
        attendance=attendance or FakeAttendance(),
        timezone_offset_minutes=-120,
    )


def test_punch_search_window_pads_the_local_range():
    lower, upper = punch_search_window(date(2024, 6, 3), date(2024, 6, 3), -120)

    assert lower == datetime(2024, 6, 2, 10, 0, tzinfo=timezone.utc)
    assert upper.date() == date(2024, 6, 4)
    assert upper.hour == 9


def test_process_replaces_the_whole_range(make_employee, punch_at):
    attendance = FakeAttendance()
    service = _service(
        [make_employee("1"), make_employee("2")],
        punches=[punch_at("1", date(2024, 6, 3), "09:00"), punch_at("1", date(2024, 6, 3), "17:00")],
        attendance=attendance,
    )

    count = service.process(start_date="2024-06-03", end_date="2024-06-04")

    assert count == 4
    [(start, end, records, codes)] = attendance.replaced
    assert (start, end, codes) == (date(2024, 6, 3), date(2024, 6, 4), None)
    statuses = {(r.employee_code, r.date.day): r.status for r in records}
    assert statuses[("1", 3)] == AttendanceStatus.PRESENT
    assert statuses[("2", 3)] == AttendanceStatus.ABSENT


def test_process_scoped_to_employee_codes(make_employee):
    attendance = FakeAttendance()
    service = _service([make_employee("1"), make_employee("2")], attendance=attendance)

    count = service.process(start_date=date(2024, 6, 3), end_date=date(2024, 6, 3), employee_codes=["001"])

    assert count == 1
    [(_, _, records, codes)] = attendance.replaced
    assert codes == ["1"]
    assert [r.employee_code for r in records] == ["1"]


@pytest.mark.parametrize(
    "start, end",
    [
        ("", "2024-06-03"),
        ("2024-06-03", "not-a-date"),
        ("2024-06-05", "2024-06-03"),
    ],
)
def test_process_rejects_bad_ranges(make_employee, start, end):
    with pytest.raises(ValidationError):
        _service([make_employee()]).process(start_date=start, end_date=end)


def test_overlapping_runs_are_rejected(make_employee):
    service = _service([make_employee()])
    service._lock.acquire()
    try:
        with pytest.raises(ProcessingError):
            service.process(start_date="2024-06-03", end_date="2024-06-03")
    finally:
        service._lock.release()


def test_list_records_paginates():
    attendance = FakeAttendance()
    service = _service([], attendance=attendance)

    service.list_records(start_date="2024-06-01", end_date="2024-06-30", employee_code=" 7 ", page=3, limit=20)

    assert attendance.list_args == dict(
        start=date(2024, 6, 1),
        end=date(2024, 6, 30),
        employee_code="7",
        limit=20,
        offset=40,
    )
