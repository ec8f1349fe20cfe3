from datetime import date, datetime, time, timedelta, timezone

import pytest

from src.attendance_resolution.attendance_resolution.employees.model import Employee
from src.attendance_resolution.attendance_resolution.punches.model import BiometricPunch

# Local time is UTC+2 throughout the tests.
OFFSET_MINUTES = -120


@pytest.fixture
def offset_minutes():
    return OFFSET_MINUTES


@pytest.fixture
def make_employee():
    def _make(code="1001", **fields):
        fields.setdefault("name", f"موظف {code}")
        return Employee(code=code, **fields)

    return _make


@pytest.fixture
def punch_at():
    """Build a punch from a local wall-clock time ("HH:MM") on ``day``."""

    def _punch(code: str, day: date, hhmm: str) -> BiometricPunch:
        hour, minute = (int(p) for p in hhmm.split(":"))
        local = datetime.combine(day, time(hour, minute))
        utc = (local + timedelta(minutes=OFFSET_MINUTES)).replace(tzinfo=timezone.utc)
        return BiometricPunch(employee_code=code, punch_datetime=utc)

    return _punch
