from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.codes import normalize_emp_code
from ..core.constants import DEFAULT_EMPLOYEE_SHIFT_START
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "code, name_ar, sector, department, section, branch, shift_start, termination_date"


def _to_employee(r: Dict[str, Any]) -> Employee:
    shift_start = normalize_mysql_time(r.get("shift_start"))
    return Employee(
        code=str(r["code"]),
        name=r.get("name_ar") or "",
        sector=r.get("sector"),
        department=r.get("department"),
        section=r.get("section"),
        branch=r.get("branch"),
        shift_start=shift_start.strftime("%H:%M") if shift_start else DEFAULT_EMPLOYEE_SHIFT_START,
        termination_date=r.get("termination_date"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_code(self, code: str) -> Optional[Employee]:
        # Codes are stored as imported ("031"), so match on the normalized form.
        wanted = normalize_emp_code(code)
        for employee in self.list_all():
            if employee.normalized_code == wanted:
                return employee
        return None
