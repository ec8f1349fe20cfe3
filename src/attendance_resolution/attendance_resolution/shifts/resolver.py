from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from ..core.constants import SATURDAY, SATURDAY_SHIFT, WEEKDAY_SHIFT
from ..core.enums import RuleType, ShiftSource
from ..employees.model import Employee
from ..rules.model import CustomShiftParams, SpecialRule
from ..rules.scope import ScopeResolver
from .model import ShiftWindow


class ShiftResolver:
    """Resolves the nominal shift window from scoped, prioritized rules."""

    def __init__(self, scope_resolver: Optional[ScopeResolver] = None):
        self._scopes = scope_resolver or ScopeResolver()

    def active_rules(self, employee: Employee, day: date, rules: Sequence[SpecialRule]) -> List[SpecialRule]:
        """Rules covering ``day`` whose scope matches, highest priority first.

        ``sorted`` is stable, so equal priorities keep their input order.
        """

        matching = [
            r
            for r in rules
            if r.covers(day) and self._scopes.matches(r.scope, employee, rule_id=r.rule_id)
        ]
        return sorted(matching, key=lambda r: r.priority, reverse=True)

    def resolve(self, employee: Employee, day: date, rules: Sequence[SpecialRule]) -> ShiftWindow:
        return self.resolve_from_active(day, self.active_rules(employee, day, rules))

    @staticmethod
    def resolve_from_active(day: date, active_rules: Sequence[SpecialRule]) -> ShiftWindow:
        default_start, default_end = WEEKDAY_SHIFT
        for rule in active_rules:
            if rule.is_type(RuleType.CUSTOM_SHIFT):
                params = rule.params if isinstance(rule.params, CustomShiftParams) else CustomShiftParams()
                return ShiftWindow(
                    start=params.shift_start or default_start,
                    end=params.shift_end or default_end,
                    source=ShiftSource.RULE_OVERRIDE,
                )

        if day.weekday() == SATURDAY:
            return ShiftWindow(start=SATURDAY_SHIFT[0], end=SATURDAY_SHIFT[1], source=ShiftSource.SATURDAY_DEFAULT)
        return ShiftWindow(start=default_start, end=default_end, source=ShiftSource.NORMAL_DEFAULT)
