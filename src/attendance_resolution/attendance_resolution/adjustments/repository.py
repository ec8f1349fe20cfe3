from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Adjustment


class AdjustmentRepository(Protocol):
    def list_between(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_code: Optional[str] = None,
        type: Optional[str] = None,
    ) -> Sequence[Adjustment]:
        raise NotImplementedError

    def create(self, adjustment: Adjustment) -> Adjustment:
        raise NotImplementedError

    def create_bulk(self, adjustments: Sequence[Adjustment]) -> int:
        raise NotImplementedError
