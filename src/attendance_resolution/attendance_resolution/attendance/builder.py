from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from ..common.codes import normalize_emp_code
from .model import AttendanceRecord


def merge_records(
    existing: Iterable[AttendanceRecord],
    fresh: Iterable[AttendanceRecord],
    start: date,
    end: date,
    employee_codes: Optional[Iterable[str]] = None,
) -> List[AttendanceRecord]:
    """Replace the processed slice of ``existing`` with ``fresh`` records.

    Existing records inside ``[start, end]`` are dropped (only those of
    ``employee_codes`` when given); everything else is kept untouched.
    Fresh records are keyed by ``(employee code, date)``, last one wins.
    """

    scoped = None if employee_codes is None else {normalize_emp_code(c) for c in employee_codes}

    def replaced(record: AttendanceRecord) -> bool:
        if not start <= record.date <= end:
            return False
        return scoped is None or normalize_emp_code(record.employee_code) in scoped

    kept = [r for r in existing if not replaced(r)]
    by_key: Dict[Tuple[str, date], AttendanceRecord] = {}
    for record in fresh:
        by_key[record.key] = record
    return kept + list(by_key.values())
