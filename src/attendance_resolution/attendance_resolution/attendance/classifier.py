from __future__ import annotations

import logging
from typing import Optional

from .factory import DayStrategyFactory
from .model import AttendanceRecord
from .strategies.base import DayContext

logger = logging.getLogger(__name__)


class DayClassifier:
    def __init__(self, factory: Optional[DayStrategyFactory] = None):
        self._factory = factory or DayStrategyFactory()

    def classify(self, ctx: DayContext) -> AttendanceRecord:
        strategy = self._factory.for_day(ctx)
        record = strategy.decide(ctx)
        logger.debug(
            "Employee %s on %s: %s via %s",
            ctx.employee.code,
            ctx.day,
            record.status.value,
            type(strategy).__name__,
        )
        return record
