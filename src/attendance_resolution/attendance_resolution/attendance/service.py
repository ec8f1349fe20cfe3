from __future__ import annotations

import logging
import threading
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Sequence, Tuple, Union

from ..adjustments.repository import AdjustmentRepository
from ..common.codes import normalize_emp_code
from ..common.validators import require_date_range, require_iso_date
from ..core.constants import (
    DEFAULT_GRACE_MINUTES,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_TIMEZONE_OFFSET_MINUTES,
    PUNCH_SEARCH_PADDING_HOURS,
)
from ..core.exceptions import ProcessingError
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from ..punches.repository import PunchRepository
from ..rules.repository import RuleRepository
from .engine import AttendanceEngine
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

DateLike = Union[date, str, None]


def _as_date(value: DateLike, field_name: str) -> date:
    if isinstance(value, date):
        return value
    return require_iso_date(value, field_name)


def punch_search_window(start: date, end: date, offset_minutes: int) -> Tuple[datetime, datetime]:
    """UTC bounds wide enough to catch every punch of the local days ``[start, end]``."""

    padding = timedelta(hours=PUNCH_SEARCH_PADDING_HOURS)
    shift = timedelta(minutes=offset_minutes)
    lower = datetime.combine(start, time.min, tzinfo=timezone.utc) + shift - padding
    upper = datetime.combine(end, time.max, tzinfo=timezone.utc) + shift + padding
    return lower, upper


class AttendanceProcessingService:
    """Loads inputs, runs the engine and replaces the stored range.

    Runs are serialized: overlapping replace-in-range writes would race.
    """

    def __init__(
        self,
        *,
        employees: EmployeeRepository,
        punches: PunchRepository,
        rules: RuleRepository,
        adjustments: AdjustmentRepository,
        leaves: LeaveRepository,
        attendance: AttendanceRepository,
        timezone_offset_minutes: int = DEFAULT_TIMEZONE_OFFSET_MINUTES,
        grace_minutes: int = DEFAULT_GRACE_MINUTES,
    ):
        self._employees = employees
        self._punches = punches
        self._rules = rules
        self._adjustments = adjustments
        self._leaves = leaves
        self._attendance = attendance
        self._default_offset = int(timezone_offset_minutes)
        self._grace_minutes = int(grace_minutes)
        self._lock = threading.Lock()

    def process(
        self,
        *,
        start_date: DateLike,
        end_date: DateLike,
        timezone_offset_minutes: int | None = None,
        employee_codes: Iterable[str] | None = None,
    ) -> int:
        start = _as_date(start_date, "startDate")
        end = _as_date(end_date, "endDate")
        require_date_range(start, end)
        offset = self._default_offset if timezone_offset_minutes is None else int(timezone_offset_minutes)

        if not self._lock.acquire(blocking=False):
            raise ProcessingError("Attendance processing is already running")
        try:
            employees = list(self._employees.list_all())
            scoped = employee_codes is not None
            if scoped:
                wanted = {normalize_emp_code(c) for c in employee_codes}
                employees = [e for e in employees if e.normalized_code in wanted]

            search_start, search_end = punch_search_window(start, end, offset)
            logger.info(
                "Processing attendance %s..%s for %d employees (offset %d min)",
                start,
                end,
                len(employees),
                offset,
            )

            records = AttendanceEngine(timezone_offset_minutes=offset, grace_minutes=self._grace_minutes).process(
                employees=employees,
                punches=self._punches.list_between(start=search_start, end=search_end),
                rules=self._rules.list_all(),
                leaves=self._leaves.list_leaves(),
                official_holidays=self._leaves.list_official_holidays(),
                adjustments=self._adjustments.list_between(start=start, end=end),
                start_date=start,
                end_date=end,
            )

            self._attendance.replace_range(
                start=start,
                end=end,
                records=records,
                employee_codes=[e.code for e in employees] if scoped else None,
            )
            logger.info("Stored %d attendance records for %s..%s", len(records), start, end)
            return len(records)
        finally:
            self._lock.release()

    def list_records(
        self,
        *,
        start_date: DateLike = None,
        end_date: DateLike = None,
        employee_code: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> Tuple[Sequence[AttendanceRecord], int]:
        start = _as_date(start_date, "startDate") if start_date else date(1970, 1, 1)
        end = _as_date(end_date, "endDate") if end_date else date(2099, 12, 31)
        safe_limit = limit if limit and limit > 0 else 0
        safe_page = page if page and page > 0 else 1
        offset = (safe_page - 1) * safe_limit if safe_limit else 0
        return self._attendance.list_range(
            start=start,
            end=end,
            employee_code=(employee_code or "").strip() or None,
            limit=safe_limit,
            offset=offset,
        )
