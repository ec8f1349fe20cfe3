from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Mapping, Sequence, Tuple

from ..common.codes import normalize_emp_code
from ..common.datetime_utils import normalize_time_to_hms, parse_iso_date, time_to_seconds
from ..common.validators import require_date_range, require_iso_date
from ..core.enums import AdjustmentType
from ..core.exceptions import ProcessingError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Adjustment
from .normalization import effect_key, normalize_effect_date_key, parse_adjustment_type
from .repository import AdjustmentRepository

logger = logging.getLogger(__name__)

REASON_UNKNOWN_EMPLOYEE = "كود الموظف غير موجود"
REASON_TYPE_NOT_ALLOWED = "نوع غير مسموح"
REASON_BAD_TIME_RANGE = "وقت البداية يجب أن يكون قبل النهاية"
REASON_BAD_DATE = "تاريخ غير صالح"

# Types whose effect is bounded by a from/to window.
TIMED_TYPES = frozenset({
    AdjustmentType.MORNING_PERMISSION,
    AdjustmentType.EVENING_PERMISSION,
    AdjustmentType.HALF_DAY_LEAVE,
    AdjustmentType.MISSION,
})


@dataclass(frozen=True)
class InvalidRow:
    row_index: int
    reason: str

    def to_dict(self) -> dict:
        return {"rowIndex": self.row_index, "reason": self.reason}


@dataclass(frozen=True)
class ImportResult:
    inserted: int
    invalid: Tuple[InvalidRow, ...] = ()
    employee_codes: Tuple[str, ...] = ()
    start_date: date | None = None
    end_date: date | None = None
    processed_count: int = 0
    reprocessed: bool = False


def _field(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def _row_index(row: Mapping[str, Any], position: int) -> int:
    raw = _field(row, "rowIndex", "row_index")
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return position


def validate_row(
    row: Mapping[str, Any],
    position: int,
    known_codes: Mapping[str, str],
    *,
    source_file_name: str | None = None,
) -> Tuple[Adjustment | None, InvalidRow | None]:
    """Turn one raw row into an ``Adjustment`` or the reason it was rejected.

    ``known_codes`` maps normalized employee codes to the stored code.
    """

    row_index = _row_index(row, position)

    code = known_codes.get(normalize_emp_code(_field(row, "employeeCode", "employee_code")))
    if code is None:
        return None, InvalidRow(row_index, REASON_UNKNOWN_EMPLOYEE)

    kind = parse_adjustment_type(_field(row, "type"))
    if kind is None:
        return None, InvalidRow(row_index, REASON_TYPE_NOT_ALLOWED)

    day_key = normalize_effect_date_key(_field(row, "date"))
    if not day_key:
        return None, InvalidRow(row_index, REASON_BAD_DATE)
    try:
        day = parse_iso_date(day_key)
    except ValueError:
        return None, InvalidRow(row_index, REASON_BAD_DATE)

    from_time = normalize_time_to_hms(str(_field(row, "fromTime", "from_time") or ""))
    to_time = normalize_time_to_hms(str(_field(row, "toTime", "to_time") or ""))
    if kind in TIMED_TYPES and time_to_seconds(from_time) >= time_to_seconds(to_time):
        return None, InvalidRow(row_index, REASON_BAD_TIME_RANGE)

    return (
        Adjustment(
            employee_code=code,
            date=day,
            type=kind.value,
            from_time=from_time,
            to_time=to_time,
            source=str(_field(row, "source") or "excel"),
            source_file_name=source_file_name or _field(row, "sourceFileName", "source_file_name"),
            note=_field(row, "note") or None,
        ),
        None,
    )


def _known_codes(employees: EmployeeRepository) -> dict:
    return {e.normalized_code: e.code for e in employees.list_all()}


class AdjustmentImportService:
    """Validates parsed sheet rows, stores the valid ones and reprocesses their days.

    ``processing`` is any object with the ``AttendanceProcessingService.process``
    signature; without it the import only stores rows.
    """

    def __init__(self, adjustments: AdjustmentRepository, employees: EmployeeRepository, *, processing=None):
        self._adjustments = adjustments
        self._employees = employees
        self._processing = processing

    def import_rows(self, rows: Sequence[Mapping[str, Any]], *, source_file_name: str | None = None) -> ImportResult:
        known_codes = _known_codes(self._employees)

        # Repeated rows in one sheet collapse to the last occurrence.
        unique: dict[str, Adjustment] = {}
        invalid: List[InvalidRow] = []
        for position, row in enumerate(rows, start=1):
            adjustment, problem = validate_row(row, position, known_codes, source_file_name=source_file_name)
            if problem is not None:
                invalid.append(problem)
                continue
            key = effect_key(
                adjustment.employee_code, adjustment.date, adjustment.type, adjustment.from_time, adjustment.to_time
            )
            unique[key] = adjustment
        valid = list(unique.values())

        inserted = self._adjustments.create_bulk(valid) if valid else 0
        logger.info("Imported %d adjustments (%d invalid rows) from %s", inserted, len(invalid), source_file_name or "-")

        if not valid:
            return ImportResult(inserted=inserted, invalid=tuple(invalid))

        codes = tuple(dict.fromkeys(a.employee_code for a in valid))
        start = min(a.date for a in valid)
        end = max(a.date for a in valid)
        processed = 0
        reprocessed = False
        if self._processing is not None:
            try:
                processed = self._processing.process(start_date=start, end_date=end, employee_codes=codes)
                reprocessed = True
            except ProcessingError as e:
                # Rows are already committed; the next processing run picks them up.
                logger.warning("Adjustments stored but %s..%s not reprocessed: %s", start, end, e)

        return ImportResult(
            inserted=inserted,
            invalid=tuple(invalid),
            employee_codes=codes,
            start_date=start,
            end_date=end,
            processed_count=processed,
            reprocessed=reprocessed,
        )


class AdjustmentService:
    """Single adjustment entry and the filtered adjustment listing."""

    def __init__(self, adjustments: AdjustmentRepository, employees: EmployeeRepository):
        self._adjustments = adjustments
        self._employees = employees

    def create(self, payload: Mapping[str, Any]) -> Adjustment:
        adjustment, problem = validate_row(payload, 0, _known_codes(self._employees))
        if problem is not None:
            raise ValidationError(problem.reason)

        created = self._adjustments.create(adjustment)
        logger.info("Created adjustment %s for %s on %s", created.type, created.employee_code, created.date)
        return created

    def list_adjustments(
        self,
        *,
        start_date: str | None = None,
        end_date: str | None = None,
        employee_code: str | None = None,
        type: str | None = None,
    ) -> Sequence[Adjustment]:
        start = require_iso_date(start_date, "startDate") if start_date else None
        end = require_iso_date(end_date, "endDate") if end_date else None
        if start is not None and end is not None:
            require_date_range(start, end)

        kind = parse_adjustment_type(type) if type else None
        return self._adjustments.list_between(
            start=start,
            end=end,
            employee_code=(employee_code or "").strip() or None,
            type=kind.value if kind is not None else ((type or "").strip() or None),
        )
