from __future__ import annotations

from ...core.enums import AdjustmentType, AttendanceStatus
from ..model import AttendanceRecord
from ..notes import compose_daily_notes
from .base import DayContext, DayStrategy, base_record


class LeaveDeductionStrategy(DayStrategy):
    """Leave taken against salary: one deduction day, no penalties."""

    def applies(self, ctx: DayContext) -> bool:
        return ctx.has_adjustment(AdjustmentType.LEAVE_DEDUCTION)

    def decide(self, ctx: DayContext) -> AttendanceRecord:
        return base_record(
            ctx,
            AttendanceStatus.LEAVE_DEDUCTION,
            leave_deduction_days=1,
            notes=compose_daily_notes(
                base_notes=AdjustmentType.LEAVE_DEDUCTION.value,
                extra_notes=[*ctx.adjustment_notes(AdjustmentType.LEAVE_DEDUCTION), *ctx.extra_notes],
            ),
        )
