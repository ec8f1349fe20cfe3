from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.codes import normalize_emp_code
from ..common.datetime_utils import LocalInstant, as_utc


@dataclass(frozen=True)
class BiometricPunch:
    """Domain entity: one raw clock stamp (immutable fact)."""

    employee_code: str
    punch_datetime: datetime

    @property
    def normalized_code(self) -> str:
        return normalize_emp_code(self.employee_code)

    @property
    def key(self) -> str:
        """Identity used to track which day consumed the punch."""
        return f"{self.normalized_code}__{int(as_utc(self.punch_datetime).timestamp() * 1000)}"


@dataclass(frozen=True)
class LocalPunch:
    """A punch paired with its local calendar day and time of day."""

    punch: BiometricPunch
    local: LocalInstant

    @classmethod
    def of(cls, punch: BiometricPunch, utc_offset_minutes: int) -> "LocalPunch":
        return cls(punch=punch, local=LocalInstant.from_instant(punch.punch_datetime, utc_offset_minutes))

    @property
    def instant(self) -> datetime:
        return as_utc(self.punch.punch_datetime)
