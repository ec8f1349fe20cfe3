from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import DayContext, DayStrategy, base_record


class TerminationPeriodStrategy(DayStrategy):
    """Days on or after the termination date: a deduction day, never an absence."""

    def applies(self, ctx: DayContext) -> bool:
        return ctx.is_terminated

    def decide(self, ctx: DayContext) -> AttendanceRecord:
        return base_record(
            ctx,
            AttendanceStatus.TERMINATION_PERIOD,
            leave_deduction_days=1,
            termination_period_days=1,
        )
