from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from ..common.codes import normalize_emp_code
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class Penalty:
    type: str
    value: float
    minutes: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "value": self.value}
        if self.minutes is not None:
            data["minutes"] = self.minutes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Penalty":
        minutes = data.get("minutes")
        return cls(
            type=str(data.get("type") or ""),
            value=float(data.get("value") or 0),
            minutes=int(minutes) if minutes is not None else None,
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the resolved attendance of one employee on one local day."""

    employee_code: str
    date: date
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    total_hours: float = 0.0
    overtime_hours: int = 0
    penalties: Tuple[Penalty, ...] = ()
    notes: str = ""
    mission_start: Optional[str] = None
    mission_end: Optional[str] = None
    half_day_excused: bool = False
    is_official_holiday: bool = False
    worked_on_official_holiday: bool = False
    comp_day_credit: float = 0
    leave_deduction_days: float = 0
    excused_absence_days: float = 0
    termination_period_days: float = 0
    comp_days_friday: float = 0
    comp_days_official: float = 0
    comp_days_total: float = 0

    @property
    def key(self) -> Tuple[str, date]:
        return normalize_emp_code(self.employee_code), self.date

    @property
    def total_penalty(self) -> float:
        return sum(p.value for p in self.penalties)

    def penalty_value(self, penalty_type: str) -> float:
        return sum(p.value for p in self.penalties if p.type == penalty_type)

    def to_dict(self) -> Dict[str, Any]:
        """JSON wire form (camelCase field names are a stable contract)."""

        return {
            "employeeCode": self.employee_code,
            "date": self.date.isoformat(),
            "checkIn": self.check_in.isoformat() if self.check_in else None,
            "checkOut": self.check_out.isoformat() if self.check_out else None,
            "totalHours": self.total_hours,
            "status": self.status.value,
            "overtimeHours": self.overtime_hours,
            "penalties": [p.to_dict() for p in self.penalties],
            "notes": self.notes,
            "missionStart": self.mission_start,
            "missionEnd": self.mission_end,
            "halfDayExcused": self.half_day_excused,
            "isOfficialHoliday": self.is_official_holiday,
            "workedOnOfficialHoliday": self.worked_on_official_holiday,
            "compDayCredit": self.comp_day_credit,
            "leaveDeductionDays": self.leave_deduction_days,
            "excusedAbsenceDays": self.excused_absence_days,
            "terminationPeriodDays": self.termination_period_days,
            "compDaysFriday": self.comp_days_friday,
            "compDaysOfficial": self.comp_days_official,
            "compDaysTotal": self.comp_days_total,
        }
