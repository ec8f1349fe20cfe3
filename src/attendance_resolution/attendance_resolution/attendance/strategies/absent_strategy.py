from __future__ import annotations

from ...core.constants import ABSENCE_PENALTY
from ...core.enums import AttendanceStatus, PenaltyType
from ..model import AttendanceRecord, Penalty
from .base import DayContext, DayStrategy, base_record


class AbsentStrategy(DayStrategy):
    """Fallback: nothing explains the day."""

    def applies(self, ctx: DayContext) -> bool:
        return True

    def decide(self, ctx: DayContext) -> AttendanceRecord:
        return base_record(
            ctx,
            AttendanceStatus.ABSENT,
            check_in=None,
            check_out=None,
            penalties=(Penalty(type=PenaltyType.ABSENCE.value, value=ABSENCE_PENALTY),),
        )
