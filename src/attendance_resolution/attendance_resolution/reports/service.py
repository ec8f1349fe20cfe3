from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.codes import normalize_emp_code
from ..common.datetime_utils import LocalInstant
from ..core.constants import DEFAULT_TIMEZONE_OFFSET_MINUTES, FRIDAY
from ..core.enums import AttendanceStatus, PenaltyType
from ..employees.repository import EmployeeRepository
from .calculator.base import PenaltyCalculator
from .calculator.standard_calculator import StandardPenaltyCalculator

DETAIL_HEADERS = (
    "التاريخ",
    "اليوم",
    "الكود",
    "اسم الموظف",
    "الدخول",
    "الخروج",
    "ساعات العمل",
    "الإضافي",
    "نوع اليوم",
    "حضر في الإجازة الرسمية؟",
    "يوم بالبدل",
    "الحالة",
    "تأخير",
    "انصراف مبكر",
    "سهو بصمة",
    "غياب",
    "غياب بعذر",
    "إجازة بالخصم",
    "فترة الترك",
    "إجمالي الجزاءات",
    "ملاحظات",
)

SUMMARY_HEADERS = (
    "الكود",
    "الاسم",
    "عدد أيام العمل",
    "عدد أيام الجمعة",
    "عدد أيام حضور الجمعة",
    "عدد أيام الإجازات الرسمية",
    "عدد أيام الإجازات (المحددة)",
    "عدد أيام الغياب",
    "إجمالي التأخيرات",
    "إجمالي الانصراف المبكر",
    "إجمالي سهو البصمة",
    "إجمالي الغياب",
    "إجمالي الجزاءات",
    "غياب بعذر",
    "إجازة بالخصم",
    "فترة الترك",
    "أيام البدل",
)

# Indexed by date.weekday() (Monday == 0).
DAY_NAMES = ("اثنين", "ثلاثاء", "أربعاء", "خميس", "جمعة", "سبت", "أحد")

DAY_TYPE_WORK = "عمل"
DAY_TYPE_FRIDAY = "جمعة"
DAY_TYPE_OFFICIAL_LEAVE = "إجازة رسمية"
DAY_TYPE_LEAVE = "إجازة"

UNKNOWN_EMPLOYEE_NAME = "(غير موجود بالماستر)"

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "حضور",
    AttendanceStatus.LATE: "تأخير",
    AttendanceStatus.ABSENT: "غياب",
    AttendanceStatus.EXCUSED: "مأذون",
    AttendanceStatus.COMP_DAY: "إجازة",
    AttendanceStatus.LEAVE_DEDUCTION: "إجازة بالخصم",
    AttendanceStatus.EXCUSED_ABSENCE: "غياب بعذر",
    AttendanceStatus.TERMINATION_PERIOD: "فترة ترك",
}

_PENALTY_COLUMNS = (
    (PenaltyType.LATE, "تأخير"),
    (PenaltyType.EARLY_LEAVE, "انصراف مبكر"),
    (PenaltyType.MISSING_CHECKOUT, "سهو بصمة"),
    (PenaltyType.ABSENCE, "غياب"),
)


@dataclass(frozen=True)
class ReportData:
    rows: List[dict]
    summary: List[dict]
    detail_headers: Sequence[str] = DETAIL_HEADERS
    summary_headers: Sequence[str] = SUMMARY_HEADERS


@dataclass
class _EmployeeSummary:
    code: str
    name: str
    work_days: int = 0
    fridays: int = 0
    friday_attendance: int = 0
    official_leaves: int = 0
    hr_leaves: int = 0
    absence_days: int = 0
    total_late: float = 0
    total_early_leave: float = 0
    total_missing_stamp: float = 0
    excused_absence_days: float = 0
    leave_deduction_days: float = 0
    termination_period_days: float = 0
    comp_days: float = 0


def _blank_zero(value: float):
    return "" if not value else value


def day_type_of(record: AttendanceRecord) -> str:
    if record.date.weekday() == FRIDAY:
        return DAY_TYPE_FRIDAY
    if record.status == AttendanceStatus.COMP_DAY:
        return DAY_TYPE_OFFICIAL_LEAVE if record.is_official_holiday else DAY_TYPE_LEAVE
    return DAY_TYPE_WORK


def status_label(record: AttendanceRecord) -> str:
    if record.date.weekday() == FRIDAY:
        return "حضور" if record.status == AttendanceStatus.FRIDAY_ATTENDED else "إجازة"
    return STATUS_LABELS.get(record.status, record.status.value)


class AttendanceReportService:
    """Builds the per-day detail table and the per-employee summary table."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: PenaltyCalculator | None = None,
        timezone_offset_minutes: int = DEFAULT_TIMEZONE_OFFSET_MINUTES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardPenaltyCalculator()
        self._offset = int(timezone_offset_minutes)

    def _clock(self, value: datetime | None) -> str:
        if value is None:
            return "-"
        return LocalInstant.from_instant(value, self._offset).hhmm()

    def build(self, *, start: date, end: date, employee_code: str | None = None) -> ReportData:
        records, _ = self._attendance.list_range(start=start, end=end, employee_code=employee_code)
        return self.build_from_records(records)

    def build_from_records(self, records: Sequence[AttendanceRecord]) -> ReportData:
        names = {e.normalized_code: e.name for e in self._employees.list_all()}
        rows: List[dict] = []
        summaries: Dict[str, _EmployeeSummary] = {}

        for rec in records:
            name = names.get(normalize_emp_code(rec.employee_code)) or UNKNOWN_EMPLOYEE_NAME
            day_type = day_type_of(rec)
            is_friday = day_type == DAY_TYPE_FRIDAY

            penalty_values = {header: rec.penalty_value(ptype.value) for ptype, header in _PENALTY_COLUMNS}
            tokens = [header for ptype, header in _PENALTY_COLUMNS if any(p.type == ptype.value for p in rec.penalties)]
            notes = " + ".join(tokens) if tokens else " ".join((rec.notes or "").split())

            if rec.is_official_holiday:
                worked_holiday = "نعم" if rec.worked_on_official_holiday else "لا"
            else:
                worked_holiday = ""

            row = {
                "التاريخ": rec.date.isoformat(),
                "اليوم": DAY_NAMES[rec.date.weekday()],
                "الكود": rec.employee_code,
                "اسم الموظف": name,
                "الدخول": self._clock(rec.check_in),
                "الخروج": self._clock(rec.check_out),
                "ساعات العمل": round(rec.total_hours, 2),
                "الإضافي": rec.overtime_hours if rec.overtime_hours > 0 else "-",
                "نوع اليوم": day_type,
                "حضر في الإجازة الرسمية؟": worked_holiday,
                "يوم بالبدل": _blank_zero(rec.comp_days_total),
                "الحالة": status_label(rec),
                "غياب بعذر": _blank_zero(rec.excused_absence_days),
                "إجازة بالخصم": _blank_zero(rec.leave_deduction_days),
                "فترة الترك": _blank_zero(rec.termination_period_days),
                "إجمالي الجزاءات": "" if is_friday else _blank_zero(self._calculator.day_total(rec)),
                "ملاحظات": notes,
            }
            for header, value in penalty_values.items():
                row[header] = "" if is_friday else _blank_zero(value)
            rows.append({h: row[h] for h in DETAIL_HEADERS})

            s = summaries.get(rec.employee_code)
            if s is None:
                s = _EmployeeSummary(code=rec.employee_code, name=name)
                summaries[rec.employee_code] = s

            if day_type == DAY_TYPE_WORK:
                s.work_days += 1
            elif day_type == DAY_TYPE_FRIDAY:
                s.fridays += 1
                if rec.status == AttendanceStatus.FRIDAY_ATTENDED:
                    s.friday_attendance += 1
            elif day_type == DAY_TYPE_OFFICIAL_LEAVE:
                s.official_leaves += 1
            else:
                s.hr_leaves += 1

            if not is_friday:
                if rec.status == AttendanceStatus.ABSENT:
                    s.absence_days += 1
                s.total_late += rec.penalty_value(PenaltyType.LATE.value)
                s.total_early_leave += rec.penalty_value(PenaltyType.EARLY_LEAVE.value)
                s.total_missing_stamp += rec.penalty_value(PenaltyType.MISSING_CHECKOUT.value)

            s.excused_absence_days += rec.excused_absence_days
            s.leave_deduction_days += rec.leave_deduction_days
            s.termination_period_days += rec.termination_period_days
            s.comp_days += rec.comp_days_total

        summary: List[dict] = []
        for s in summaries.values():
            weighted_absence = self._calculator.weighted_absence(
                absence_days=s.absence_days,
                excused_absence_days=s.excused_absence_days,
            )
            values = (
                s.code,
                s.name,
                s.work_days,
                s.fridays,
                s.friday_attendance,
                s.official_leaves,
                s.hr_leaves,
                s.absence_days,
                s.total_late,
                s.total_early_leave,
                s.total_missing_stamp,
                weighted_absence,
                s.total_late + s.total_early_leave + s.total_missing_stamp + weighted_absence,
                s.excused_absence_days,
                s.leave_deduction_days,
                s.termination_period_days,
                s.comp_days,
            )
            summary.append(dict(zip(SUMMARY_HEADERS, values)))

        return ReportData(rows=rows, summary=summary)
