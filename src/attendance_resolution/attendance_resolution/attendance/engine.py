"""Attendance resolution engine.

A pure function of its inputs: employees, punches, rules, leaves, official
holidays and adjustments go in, one ``AttendanceRecord`` per employee per day
of ``[start_date, end_date]`` comes out. No I/O, no ambient state.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple

from ..adjustments.model import Adjustment
from ..common.datetime_utils import iter_days
from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_TIMEZONE_OFFSET_MINUTES
from ..employees.model import Employee
from ..leaves.model import Leave, OfficialHoliday
from ..leaves.resolver import LeaveResolver
from ..punches.model import BiometricPunch
from ..punches.partitioner import PunchPartitioner
from ..rules.model import SpecialRule
from ..rules.scope import ScopeResolver
from ..shifts.resolver import ShiftResolver
from .classifier import DayClassifier
from .model import AttendanceRecord
from .strategies.base import DayContext

logger = logging.getLogger(__name__)


class AttendanceEngine:
    def __init__(
        self,
        *,
        timezone_offset_minutes: int | None = None,
        grace_minutes: int = DEFAULT_GRACE_MINUTES,
        classifier: DayClassifier | None = None,
    ):
        self._offset = DEFAULT_TIMEZONE_OFFSET_MINUTES if timezone_offset_minutes is None else int(timezone_offset_minutes)
        self._grace = int(grace_minutes)
        self._classifier = classifier or DayClassifier()

    def process(
        self,
        *,
        employees: Sequence[Employee],
        punches: Iterable[BiometricPunch],
        rules: Sequence[SpecialRule],
        leaves: Iterable[Leave],
        official_holidays: Iterable[OfficialHoliday],
        adjustments: Iterable[Adjustment],
        start_date: date,
        end_date: date,
    ) -> List[AttendanceRecord]:
        scopes = ScopeResolver()
        shifts = ShiftResolver(scopes)
        leave_resolver = LeaveResolver(leaves, official_holidays)
        partitioner = PunchPartitioner(utc_offset_minutes=self._offset)

        punches_by_employee: Dict[str, List[BiometricPunch]] = defaultdict(list)
        for punch in punches:
            punches_by_employee[punch.normalized_code].append(punch)

        adjustments_by_day: Dict[Tuple[str, date], List[Adjustment]] = defaultdict(list)
        for adj in adjustments:
            adjustments_by_day[(adj.normalized_code, adj.date)].append(adj)

        records: List[AttendanceRecord] = []
        for employee in employees:
            code = employee.normalized_code
            partitioned = partitioner.partition(
                employee,
                punches_by_employee.get(code, ()),
                start=start_date,
                end=end_date,
            )
            for day in iter_days(start_date, end_date):
                active = shifts.active_rules(employee, day, rules)
                ctx = DayContext(
                    employee=employee,
                    day=day,
                    shift=shifts.resolve_from_active(day, active),
                    punches=partitioned.punches_for(day),
                    adjustments=tuple(adjustments_by_day.get((code, day), ())),
                    active_rules=tuple(active),
                    leave=leave_resolver.resolve(employee, day, active),
                    holiday=leave_resolver.holiday_for(day),
                    extra_notes=partitioned.notes_for(day),
                    utc_offset_minutes=self._offset,
                    grace_minutes=self._grace,
                )
                records.append(self._classifier.classify(ctx))

        logger.info(
            "Resolved %d records for %d employees from %s to %s",
            len(records),
            len(employees),
            start_date,
            end_date,
        )
        return records


def process_attendance(
    employees: Sequence[Employee],
    punches: Iterable[BiometricPunch],
    rules: Sequence[SpecialRule],
    leaves: Iterable[Leave],
    official_holidays: Iterable[OfficialHoliday],
    adjustments: Iterable[Adjustment],
    start_date: date,
    end_date: date,
    timezone_offset_minutes: int | None = None,
) -> List[AttendanceRecord]:
    return AttendanceEngine(timezone_offset_minutes=timezone_offset_minutes).process(
        employees=employees,
        punches=punches,
        rules=rules,
        leaves=leaves,
        official_holidays=official_holidays,
        adjustments=adjustments,
        start_date=start_date,
        end_date=end_date,
    )
