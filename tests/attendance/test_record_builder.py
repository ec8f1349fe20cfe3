from datetime import date

from src.attendance_resolution.attendance_resolution.attendance.builder import merge_records
from src.attendance_resolution.attendance_resolution.attendance.model import AttendanceRecord, Penalty
from src.attendance_resolution.attendance_resolution.core.enums import AttendanceStatus


def _rec(code, day, status=AttendanceStatus.ABSENT):
    return AttendanceRecord(employee_code=code, date=date(2024, 6, day), status=status)


def test_replaces_only_the_processed_range():
    existing = [_rec("1", 2), _rec("1", 3), _rec("1", 4), _rec("1", 5)]
    fresh = [_rec("1", 3, AttendanceStatus.PRESENT), _rec("1", 4, AttendanceStatus.PRESENT)]

    merged = merge_records(existing, fresh, date(2024, 6, 3), date(2024, 6, 4))

    by_day = {r.date.day: r.status for r in merged}
    assert by_day == {
        2: AttendanceStatus.ABSENT,
        3: AttendanceStatus.PRESENT,
        4: AttendanceStatus.PRESENT,
        5: AttendanceStatus.ABSENT,
    }


def test_scoped_merge_keeps_other_employees():
    existing = [_rec("1", 3), _rec("2", 3)]
    fresh = [_rec("001", 3, AttendanceStatus.PRESENT)]

    merged = merge_records(existing, fresh, date(2024, 6, 3), date(2024, 6, 3), employee_codes=["1"])

    assert sorted((r.employee_code, r.status.value) for r in merged) == [("001", "Present"), ("2", "Absent")]


def test_duplicate_fresh_records_last_wins():
    fresh = [_rec("1", 3), _rec("1", 3, AttendanceStatus.LATE)]

    merged = merge_records([], fresh, date(2024, 6, 3), date(2024, 6, 3))

    assert [r.status for r in merged] == [AttendanceStatus.LATE]


def test_record_to_dict_uses_camel_case():
    rec = AttendanceRecord(
        employee_code="1",
        date=date(2024, 6, 3),
        status=AttendanceStatus.LATE,
        penalties=(Penalty(type="تأخير", value=0.5, minutes=40),),
    )

    data = rec.to_dict()

    assert data["employeeCode"] == "1"
    assert data["date"] == "2024-06-03"
    assert data["status"] == "Late"
    assert data["penalties"] == [{"type": "تأخير", "value": 0.5, "minutes": 40}]
    assert data["checkIn"] is None
    assert rec.total_penalty == 0.5
    assert Penalty.from_dict(data["penalties"][0]) == rec.penalties[0]
