from __future__ import annotations

import json
from datetime import date, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..common.datetime_utils import as_utc
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column, time_text
from .model import AttendanceRecord, Penalty
from .repository import AttendanceRepository

_COLUMNS = (
    "employee_code",
    "work_date",
    "check_in",
    "check_out",
    "total_hours",
    "status",
    "overtime_hours",
    "penalties",
    "notes",
    "mission_start",
    "mission_end",
    "half_day_excused",
    "is_official_holiday",
    "worked_on_official_holiday",
    "comp_day_credit",
    "leave_deduction_days",
    "excused_absence_days",
    "termination_period_days",
    "comp_days_friday",
    "comp_days_official",
    "comp_days_total",
)


def _utc(value):
    return value.replace(tzinfo=timezone.utc) if value is not None else None


def _penalties(raw: Any) -> Tuple[Penalty, ...]:
    items = load_json_column(raw, default=[])
    return tuple(Penalty.from_dict(p) for p in items or [] if isinstance(p, dict))


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        employee_code=str(r["employee_code"]),
        date=r["work_date"],
        check_in=_utc(r.get("check_in")),
        check_out=_utc(r.get("check_out")),
        total_hours=float(r.get("total_hours") or 0),
        status=AttendanceStatus(r["status"]),
        overtime_hours=int(r.get("overtime_hours") or 0),
        penalties=_penalties(r.get("penalties")),
        notes=r.get("notes") or "",
        mission_start=time_text(r.get("mission_start")),
        mission_end=time_text(r.get("mission_end")),
        half_day_excused=bool(r.get("half_day_excused")),
        is_official_holiday=bool(r.get("is_official_holiday")),
        worked_on_official_holiday=bool(r.get("worked_on_official_holiday")),
        comp_day_credit=float(r.get("comp_day_credit") or 0),
        leave_deduction_days=float(r.get("leave_deduction_days") or 0),
        excused_absence_days=float(r.get("excused_absence_days") or 0),
        termination_period_days=float(r.get("termination_period_days") or 0),
        comp_days_friday=float(r.get("comp_days_friday") or 0),
        comp_days_official=float(r.get("comp_days_official") or 0),
        comp_days_total=float(r.get("comp_days_total") or 0),
    )


def _to_row(rec: AttendanceRecord) -> tuple:
    def naive_utc(value):
        return as_utc(value).replace(tzinfo=None) if value is not None else None

    return (
        rec.employee_code,
        rec.date,
        naive_utc(rec.check_in),
        naive_utc(rec.check_out),
        rec.total_hours,
        rec.status.value,
        rec.overtime_hours,
        json.dumps([p.to_dict() for p in rec.penalties], ensure_ascii=False),
        rec.notes,
        rec.mission_start,
        rec.mission_end,
        int(rec.half_day_excused),
        int(rec.is_official_holiday),
        int(rec.worked_on_official_holiday),
        rec.comp_day_credit,
        rec.leave_deduction_days,
        rec.excused_absence_days,
        rec.termination_period_days,
        rec.comp_days_friday,
        rec.comp_days_official,
        rec.comp_days_total,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Check-in/out instants are stored as UTC DATETIME values."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(
        self,
        *,
        start: date,
        end: date,
        employee_code: Optional[str] = None,
        limit: int = 0,
        offset: int = 0,
    ) -> Tuple[Sequence[AttendanceRecord], int]:
        where = "work_date BETWEEN %s AND %s"
        params: List[Any] = [start, end]
        if employee_code:
            where += " AND employee_code=%s"
            params.append(employee_code)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM attendance_records WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            sql = f"""
                SELECT {", ".join(_COLUMNS)}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date, employee_code
            """
            if limit > 0:
                sql += " LIMIT %s OFFSET %s"
                params.extend([int(limit), int(offset)])
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)], total

    def replace_range(
        self,
        *,
        start: date,
        end: date,
        records: Sequence[AttendanceRecord],
        employee_codes: Optional[Iterable[str]] = None,
    ) -> int:
        codes = list(employee_codes) if employee_codes is not None else None
        with db_cursor(self._conn_factory) as (_, cur):
            # One transaction: readers never see a half-replaced range.
            if codes is None:
                cur.execute("DELETE FROM attendance_records WHERE work_date BETWEEN %s AND %s", (start, end))
            elif codes:
                placeholders = ",".join(["%s"] * len(codes))
                cur.execute(
                    f"DELETE FROM attendance_records WHERE work_date BETWEEN %s AND %s AND employee_code IN ({placeholders})",
                    (start, end, *codes),
                )

            if records:
                placeholders = ",".join(["%s"] * len(_COLUMNS))
                cur.executemany(
                    f"INSERT INTO attendance_records({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                    [_to_row(r) for r in records],
                )
            return len(records)
