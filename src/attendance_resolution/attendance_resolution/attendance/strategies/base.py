from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from ...adjustments.model import Adjustment
from ...common.datetime_utils import local_datetime
from ...core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_TIMEZONE_OFFSET_MINUTES, FRIDAY
from ...core.enums import AdjustmentType, AttendanceStatus, RuleType
from ...employees.model import Employee
from ...leaves.model import NOT_A_LEAVE_DAY, LeaveResolution, OfficialHoliday
from ...punches.model import LocalPunch
from ...rules.model import SpecialRule
from ...shifts.model import ShiftWindow
from ..model import AttendanceRecord
from ..notes import compose_daily_notes


@dataclass(frozen=True)
class DayContext:
    """Everything known about one employee-day before it is classified."""

    employee: Employee
    day: date
    shift: ShiftWindow
    punches: Tuple[LocalPunch, ...] = ()
    adjustments: Tuple[Adjustment, ...] = ()
    active_rules: Tuple[SpecialRule, ...] = ()
    leave: LeaveResolution = NOT_A_LEAVE_DAY
    holiday: Optional[OfficialHoliday] = None
    extra_notes: Tuple[str, ...] = ()
    utc_offset_minutes: int = DEFAULT_TIMEZONE_OFFSET_MINUTES
    grace_minutes: int = DEFAULT_GRACE_MINUTES

    @property
    def check_in(self) -> Optional[LocalPunch]:
        return self.punches[0] if self.punches else None

    @property
    def check_out(self) -> Optional[LocalPunch]:
        return self.punches[-1] if len(self.punches) > 1 else None

    @property
    def is_friday(self) -> bool:
        return self.day.weekday() == FRIDAY

    @property
    def has_overnight_stay(self) -> bool:
        return any(r.is_type(RuleType.OVERNIGHT_STAY) for r in self.active_rules)

    @property
    def is_terminated(self) -> bool:
        termination = self.employee.termination_date
        return termination is not None and self.day >= termination

    @property
    def grace(self) -> timedelta:
        return timedelta(minutes=self.grace_minutes)

    def has_adjustment(self, kind: AdjustmentType) -> bool:
        return any(a.kind == kind for a in self.adjustments)

    def adjustment_notes(self, kind: AdjustmentType) -> Tuple[str, ...]:
        return tuple(a.note for a in self.adjustments if a.kind == kind and a.note)

    def at(self, seconds_of_day: int) -> datetime:
        """Local wall-clock datetime ``seconds_of_day`` after this day's midnight."""
        return local_datetime(self.day, seconds_of_day)

    def seconds_since_midnight(self, punch: LocalPunch) -> int:
        """Seconds from this day's midnight (a moved post-midnight checkout exceeds 24h)."""
        return int((punch.local.wall_clock - self.at(0)).total_seconds())


class DayStrategy(ABC):
    """Strategy Pattern: one way of turning a day's facts into a record."""

    @abstractmethod
    def applies(self, ctx: DayContext) -> bool:
        raise NotImplementedError

    @abstractmethod
    def decide(self, ctx: DayContext) -> AttendanceRecord:
        raise NotImplementedError


def punch_span_hours(ctx: DayContext) -> float:
    if ctx.check_in is None or ctx.check_out is None:
        return 0.0
    seconds = (ctx.check_out.instant - ctx.check_in.instant).total_seconds()
    return round(max(0.0, seconds) / 3600, 2)


def base_record(ctx: DayContext, status: AttendanceStatus, **fields) -> AttendanceRecord:
    """Record carrying the day's punches (when any) and reassignment notes."""

    fields.setdefault("check_in", ctx.check_in.instant if ctx.check_in else None)
    fields.setdefault("check_out", ctx.check_out.instant if ctx.check_out else None)
    if "notes" not in fields:
        fields["notes"] = compose_daily_notes(
            base_notes=None,
            extra_notes=ctx.extra_notes,
            leave_notes=ctx.leave.notes,
            has_overnight_stay=ctx.has_overnight_stay,
        )
    return AttendanceRecord(employee_code=ctx.employee.code, date=ctx.day, status=status, **fields)
