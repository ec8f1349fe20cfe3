from __future__ import annotations

from .base import PenaltyCalculator
from ...attendance.model import AttendanceRecord
from ...core.constants import ABSENCE_REPORT_WEIGHT
from ...core.enums import PenaltyType


class StandardPenaltyCalculator(PenaltyCalculator):
    """Standard rule: an absence weighs double, an excused absence counts once."""

    def __init__(self, absence_weight: float = ABSENCE_REPORT_WEIGHT):
        self._absence_weight = absence_weight

    def weighted_absence(self, *, absence_days: float, excused_absence_days: float = 0) -> float:
        return absence_days * self._absence_weight + excused_absence_days

    def day_total(self, record: AttendanceRecord) -> float:
        total = 0.0
        for p in record.penalties:
            if p.type == PenaltyType.ABSENCE.value:
                total += p.value * self._absence_weight
            else:
                total += p.value
        return total
