from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Optional, Sequence

from ..common.codes import normalize_emp_code
from ..core.constants import COLLECTIONS_SECTOR, HR_LEAVE_CATEGORY, OFFICIAL_LEAVE_CATEGORY
from ..core.enums import LeaveScope, LeaveType, RuleType
from ..employees.model import Employee
from ..rules.model import ExemptParams, SpecialRule
from .model import NOT_A_LEAVE_DAY, Leave, LeaveResolution, OfficialHoliday


def leave_scope_matches(leave: Leave, employee: Employee) -> bool:
    scope = (leave.scope or "").strip()
    value = leave.scope_value
    if scope == LeaveScope.ALL.value:
        return True
    if scope == LeaveScope.SECTOR.value:
        return value == employee.sector
    if scope == LeaveScope.DEPARTMENT.value:
        return value == employee.department
    if scope == LeaveScope.SECTION.value:
        return value == employee.section
    if scope == LeaveScope.BRANCH.value:
        return value == employee.branch
    if scope == LeaveScope.EMP.value:
        return normalize_emp_code(value) == employee.normalized_code
    return False


class LeaveResolver:
    """Decides whether a day is a full exemption for an employee."""

    def __init__(self, leaves: Iterable[Leave] = (), holidays: Iterable[OfficialHoliday] = ()):
        self._leaves = list(leaves)
        self._holidays: Dict[date, OfficialHoliday] = {}
        for holiday in holidays:
            self._holidays.setdefault(holiday.date, holiday)

    def applies(self, leave: Leave, employee: Employee, day: date) -> bool:
        if not leave.covers(day):
            return False
        if leave.leave_type == LeaveType.COLLECTIONS.value and employee.sector != COLLECTIONS_SECTOR:
            return False
        return leave_scope_matches(leave, employee)

    def resolve(self, employee: Employee, day: date, active_rules: Sequence[SpecialRule]) -> LeaveResolution:
        exempt_rule = next((r for r in active_rules if r.is_type(RuleType.ATTENDANCE_EXEMPT)), None)
        matched = [lv for lv in self._leaves if self.applies(lv, employee, day)]
        if exempt_rule is None and not matched:
            return NOT_A_LEAVE_DAY

        if exempt_rule is not None:
            official = isinstance(exempt_rule.params, ExemptParams) and exempt_rule.params.is_official
        else:
            official = any(lv.leave_type == LeaveType.OFFICIAL.value for lv in matched)

        return LeaveResolution(
            is_leave_day=True,
            category=OFFICIAL_LEAVE_CATEGORY if official else HR_LEAVE_CATEGORY,
            notes=tuple(lv.note for lv in matched if lv.note),
            official=official,
        )

    def holiday_for(self, day: date) -> Optional[OfficialHoliday]:
        return self._holidays.get(day)
