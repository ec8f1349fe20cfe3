from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True)
class Leave:
    """Domain entity: a dated leave period granted to a slice of the roster."""

    leave_type: str
    scope: str
    start_date: date
    end_date: date
    scope_value: Optional[str] = None
    note: Optional[str] = None
    leave_id: Optional[int] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class OfficialHoliday:
    date: date
    name: str


@dataclass(frozen=True)
class LeaveResolution:
    is_leave_day: bool = False
    category: Optional[str] = None
    notes: Tuple[str, ...] = ()
    official: bool = False


NOT_A_LEAVE_DAY = LeaveResolution()
