from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import BiometricPunch


class PunchRepository(Protocol):
    def list_between(self, *, start: datetime, end: datetime) -> Sequence[BiometricPunch]:
        """Punches whose absolute instant lies in [start, end] (UTC)."""

        raise NotImplementedError
