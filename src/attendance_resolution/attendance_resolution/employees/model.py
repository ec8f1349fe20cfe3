from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.codes import normalize_emp_code
from ..core.constants import DEFAULT_EMPLOYEE_SHIFT_START


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee from the HR roster.

    Note: read-only to the engine; the roster is owned by the import side.
    """

    code: str
    name: str = ""
    sector: Optional[str] = None
    department: Optional[str] = None
    section: Optional[str] = None
    branch: Optional[str] = None
    shift_start: str = DEFAULT_EMPLOYEE_SHIFT_START
    termination_date: Optional[date] = None

    @property
    def normalized_code(self) -> str:
        return normalize_emp_code(self.code)

    @property
    def shift_start_hour(self) -> int:
        head = (self.shift_start or DEFAULT_EMPLOYEE_SHIFT_START).split(":")[0]
        try:
            return int(head)
        except ValueError:
            return int(DEFAULT_EMPLOYEE_SHIFT_START.split(":")[0])
