from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence, Tuple

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_range(
        self,
        *,
        start: date,
        end: date,
        employee_code: Optional[str] = None,
        limit: int = 0,
        offset: int = 0,
    ) -> Tuple[Sequence[AttendanceRecord], int]:
        """Records in ``[start, end]`` plus the unpaginated total. ``limit=0`` returns all."""

        raise NotImplementedError

    def replace_range(
        self,
        *,
        start: date,
        end: date,
        records: Sequence[AttendanceRecord],
        employee_codes: Optional[Iterable[str]] = None,
    ) -> int:
        """Drop stored records in ``[start, end]`` (of ``employee_codes`` when given), then store ``records``."""

        raise NotImplementedError
