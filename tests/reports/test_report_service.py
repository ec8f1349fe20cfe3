from datetime import date, datetime, timezone

import pytest

from src.attendance_resolution.attendance_resolution.attendance.model import AttendanceRecord, Penalty
from src.attendance_resolution.attendance_resolution.core.enums import AttendanceStatus
from src.attendance_resolution.attendance_resolution.reports.calculator.standard_calculator import (
    StandardPenaltyCalculator,
)
from src.attendance_resolution.attendance_resolution.reports.service import (
    DETAIL_HEADERS,
    SUMMARY_HEADERS,
    AttendanceReportService,
)


class FakeEmployees:
    def __init__(self, employees):
        self._employees = list(employees)

    def list_all(self):
        return list(self._employees)


class FakeAttendance:
    def __init__(self, records):
        self._records = list(records)

    def list_range(self, *, start, end, employee_code=None, limit=0, offset=0):
        rows = [r for r in self._records if start <= r.date <= end]
        if employee_code:
            rows = [r for r in rows if r.employee_code == employee_code]
        return rows, len(rows)


def _records():
    return [
        AttendanceRecord(
            employee_code="1001",
            date=date(2024, 6, 3),
            status=AttendanceStatus.LATE,
            check_in=datetime(2024, 6, 3, 7, 40, tzinfo=timezone.utc),
            total_hours=0,
            penalties=(
                Penalty(type="تأخير", value=0.5, minutes=40),
                Penalty(type="سهو بصمة", value=0.5),
            ),
            notes="سهو بصمة",
        ),
        AttendanceRecord(
            employee_code="1001",
            date=date(2024, 6, 4),
            status=AttendanceStatus.ABSENT,
            penalties=(Penalty(type="غياب", value=1.0),),
        ),
        AttendanceRecord(
            employee_code="1001",
            date=date(2024, 6, 5),
            status=AttendanceStatus.EXCUSED_ABSENCE,
            excused_absence_days=1,
        ),
        AttendanceRecord(
            employee_code="1001",
            date=date(2024, 6, 7),
            status=AttendanceStatus.FRIDAY_ATTENDED,
            check_in=datetime(2024, 6, 7, 9, 0, tzinfo=timezone.utc),
            check_out=datetime(2024, 6, 7, 14, 0, tzinfo=timezone.utc),
            total_hours=5.0,
            comp_days_friday=1,
            comp_days_total=1,
        ),
        AttendanceRecord(
            employee_code="2002",
            date=date(2024, 6, 4),
            status=AttendanceStatus.COMP_DAY,
            is_official_holiday=True,
            notes="Official Leave، عيد",
        ),
    ]


def _service(records):
    return AttendanceReportService(
        FakeAttendance(records),
        FakeEmployees([]),
        calculator=StandardPenaltyCalculator(),
        timezone_offset_minutes=-120,
    )


def test_detail_rows(make_employee):
    service = AttendanceReportService(
        FakeAttendance(_records()),
        FakeEmployees([make_employee("1001", name="أحمد")]),
        timezone_offset_minutes=-120,
    )

    report = service.build(start=date(2024, 6, 1), end=date(2024, 6, 30))

    assert len(report.rows) == 5
    assert all(tuple(row) == DETAIL_HEADERS for row in report.rows)

    late = report.rows[0]
    assert late["اليوم"] == "اثنين"
    assert late["اسم الموظف"] == "أحمد"
    assert late["الدخول"] == "09:40"
    assert late["الخروج"] == "-"
    assert late["الحالة"] == "تأخير"
    assert late["تأخير"] == 0.5
    assert late["سهو بصمة"] == 0.5
    assert late["إجمالي الجزاءات"] == 1.0
    assert late["ملاحظات"] == "تأخير + سهو بصمة"

    absent = report.rows[1]
    assert absent["إجمالي الجزاءات"] == 2.0

    friday = report.rows[3]
    assert friday["نوع اليوم"] == "جمعة"
    assert friday["الحالة"] == "حضور"
    assert friday["الدخول"] == "11:00"
    assert friday["يوم بالبدل"] == 1

    holiday = report.rows[4]
    assert holiday["اسم الموظف"] == "(غير موجود بالماستر)"
    assert holiday["نوع اليوم"] == "إجازة رسمية"
    assert holiday["حضر في الإجازة الرسمية؟"] == "لا"
    assert holiday["ملاحظات"] == "Official Leave، عيد"


def test_summary_weights_absences():
    report = _service(_records()).build_from_records(_records())

    by_code = {row["الكود"]: row for row in report.summary}
    assert tuple(by_code["1001"]) == SUMMARY_HEADERS

    emp = by_code["1001"]
    assert emp["عدد أيام العمل"] == 3
    assert emp["عدد أيام الجمعة"] == 1
    assert emp["عدد أيام حضور الجمعة"] == 1
    assert emp["عدد أيام الغياب"] == 1
    assert emp["إجمالي التأخيرات"] == pytest.approx(0.5)
    assert emp["إجمالي سهو البصمة"] == pytest.approx(0.5)
    assert emp["إجمالي الغياب"] == 3
    assert emp["إجمالي الجزاءات"] == pytest.approx(4.0)
    assert emp["غياب بعذر"] == 1
    assert emp["أيام البدل"] == 1

    assert by_code["2002"]["عدد أيام الإجازات الرسمية"] == 1


def test_build_filters_by_employee():
    report = _service(_records()).build(start=date(2024, 6, 1), end=date(2024, 6, 30), employee_code="2002")

    assert [row["الكود"] for row in report.rows] == ["2002"]


def test_standard_calculator():
    calc = StandardPenaltyCalculator()

    assert calc.weighted_absence(absence_days=2, excused_absence_days=1) == 5
    assert calc.weighted_absence(absence_days=0) == 0
