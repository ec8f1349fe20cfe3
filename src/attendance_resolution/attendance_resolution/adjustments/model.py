from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.codes import normalize_emp_code
from ..core.enums import AdjustmentType
from .normalization import parse_adjustment_type


@dataclass(frozen=True)
class Adjustment:
    """Domain entity: an ad-hoc change to one employee's day (permission, mission...)."""

    employee_code: str
    date: date
    type: str
    from_time: str = "00:00:00"
    to_time: str = "00:00:00"
    source: str = "excel"
    source_file_name: Optional[str] = None
    note: Optional[str] = None
    adjustment_id: Optional[int] = None

    @property
    def normalized_code(self) -> str:
        return normalize_emp_code(self.employee_code)

    @property
    def kind(self) -> Optional[AdjustmentType]:
        return parse_adjustment_type(self.type)

    def to_dict(self) -> dict:
        return {
            "id": self.adjustment_id,
            "employeeCode": self.employee_code,
            "date": self.date.isoformat(),
            "type": self.type,
            "fromTime": self.from_time,
            "toTime": self.to_time,
            "source": self.source,
            "sourceFileName": self.source_file_name,
            "note": self.note,
        }


@dataclass(frozen=True)
class AdjustmentEffects:
    """Effective window of a day after folding in its adjustments (seconds of day)."""

    effective_shift_start_seconds: int
    effective_shift_end_seconds: int
    mission_start_seconds: Optional[int] = None
    mission_end_seconds: Optional[int] = None
    suppress_penalties: bool = False
    half_day_excused: bool = False
    first_stamp_seconds: Optional[int] = None
    last_stamp_seconds: Optional[int] = None

    @property
    def has_mission(self) -> bool:
        return self.mission_start_seconds is not None and self.mission_end_seconds is not None
