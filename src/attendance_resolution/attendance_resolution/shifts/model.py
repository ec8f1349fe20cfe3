from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import normalize_time_to_hms, time_to_seconds
from ..core.enums import ShiftSource


@dataclass(frozen=True)
class ShiftWindow:
    """Value object: the nominal shift of one employee on one day, before adjustments."""

    start: str
    end: str
    source: ShiftSource

    @property
    def start_seconds(self) -> int:
        return time_to_seconds(self.start)

    @property
    def end_seconds(self) -> int:
        return time_to_seconds(self.end)

    @property
    def trace(self) -> str:
        start = normalize_time_to_hms(self.start)[:5]
        end = normalize_time_to_hms(self.end)[:5]
        return f"Shift {start}-{end} ({self.source.value})"
