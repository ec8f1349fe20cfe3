from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import AttendanceRecord


class PenaltyCalculator(ABC):
    """Calculator interface (Strategy Pattern for penalty weighting in reports)."""

    @abstractmethod
    def weighted_absence(self, *, absence_days: float, excused_absence_days: float = 0) -> float:
        raise NotImplementedError

    @abstractmethod
    def day_total(self, record: AttendanceRecord) -> float:
        raise NotImplementedError
