from __future__ import annotations

from ...core.enums import AdjustmentType, AttendanceStatus
from ..model import AttendanceRecord
from ..notes import compose_daily_notes
from .base import DayContext, DayStrategy, base_record


class ExcusedAbsenceStrategy(DayStrategy):
    def applies(self, ctx: DayContext) -> bool:
        return ctx.has_adjustment(AdjustmentType.EXCUSED_ABSENCE)

    def decide(self, ctx: DayContext) -> AttendanceRecord:
        return base_record(
            ctx,
            AttendanceStatus.EXCUSED_ABSENCE,
            excused_absence_days=1,
            notes=compose_daily_notes(
                base_notes=AdjustmentType.EXCUSED_ABSENCE.value,
                extra_notes=[*ctx.adjustment_notes(AdjustmentType.EXCUSED_ABSENCE), *ctx.extra_notes],
            ),
        )
