from __future__ import annotations

from typing import Protocol, Sequence

from .model import Leave, OfficialHoliday


class LeaveRepository(Protocol):
    def list_leaves(self) -> Sequence[Leave]:
        raise NotImplementedError

    def list_official_holidays(self) -> Sequence[OfficialHoliday]:
        raise NotImplementedError
