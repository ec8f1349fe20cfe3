from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import DayContext, DayStrategy
from .strategies.excused_absence_strategy import ExcusedAbsenceStrategy
from .strategies.leave_deduction_strategy import LeaveDeductionStrategy
from .strategies.rest_day_strategy import RestDayStrategy
from .strategies.termination_strategy import TerminationPeriodStrategy
from .strategies.workday_strategy import WorkdayStrategy


def default_strategies() -> Sequence[DayStrategy]:
    """Most specific facts first; the absent fallback always applies."""

    return (
        TerminationPeriodStrategy(),
        RestDayStrategy(),
        LeaveDeductionStrategy(),
        ExcusedAbsenceStrategy(),
        WorkdayStrategy(),
        AbsentStrategy(),
    )


@dataclass
class DayStrategyFactory:
    """Factory Pattern: choose the strategy for a day by precedence."""

    strategies: Sequence[DayStrategy] = field(default_factory=default_strategies)

    def for_day(self, ctx: DayContext) -> DayStrategy:
        for strategy in self.strategies:
            if strategy.applies(ctx):
                return strategy
        return AbsentStrategy()
