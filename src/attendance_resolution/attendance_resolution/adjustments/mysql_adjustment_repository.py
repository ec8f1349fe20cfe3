from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..common.datetime_utils import normalize_time_to_hms
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, time_text
from .model import Adjustment
from .repository import AdjustmentRepository

_INSERT_SQL = """
    INSERT INTO adjustments(
        employee_code, work_date, type, from_time, to_time, source, source_file_name, note, imported_at
    )
    VALUES (%s,%s,%s,%s,%s,%s,%s,%s,NOW())
"""


def _to_adjustment(r: Dict[str, Any]) -> Adjustment:
    return Adjustment(
        adjustment_id=int(r["adjustment_id"]),
        employee_code=str(r["employee_code"]),
        date=r["work_date"],
        type=r["type"],
        from_time=time_text(r.get("from_time"), "00:00:00"),
        to_time=time_text(r.get("to_time"), "00:00:00"),
        source=r.get("source") or "excel",
        source_file_name=r.get("source_file_name"),
        note=r.get("note"),
    )


def _insert_params(a: Adjustment) -> tuple:
    return (
        a.employee_code,
        a.date,
        a.type,
        normalize_time_to_hms(a.from_time),
        normalize_time_to_hms(a.to_time),
        a.source,
        a.source_file_name,
        a.note,
    )


class MySQLAdjustmentRepository(AdjustmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_code: Optional[str] = None,
        type: Optional[str] = None,
    ) -> Sequence[Adjustment]:
        where: List[str] = []
        params: List[Any] = []
        if start is not None:
            where.append("work_date >= %s")
            params.append(start)
        if end is not None:
            where.append("work_date <= %s")
            params.append(end)
        if employee_code:
            where.append("employee_code = %s")
            params.append(employee_code)
        if type:
            where.append("type = %s")
            params.append(type)
        where_sql = f"WHERE {' AND '.join(where)}" if where else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT adjustment_id, employee_code, work_date, type, from_time, to_time,
                       source, source_file_name, note
                FROM adjustments
                {where_sql}
                ORDER BY work_date, adjustment_id
                """,
                tuple(params),
            )
            return [_to_adjustment(r) for r in fetchall(cur)]

    def create(self, adjustment: Adjustment) -> Adjustment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT_SQL, _insert_params(adjustment))
            return replace(
                adjustment,
                adjustment_id=int(cur.lastrowid),
                from_time=normalize_time_to_hms(adjustment.from_time),
                to_time=normalize_time_to_hms(adjustment.to_time),
            )

    def create_bulk(self, adjustments: Sequence[Adjustment]) -> int:
        if not adjustments:
            return 0
        rows = [_insert_params(a) for a in adjustments]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_INSERT_SQL, rows)
            return len(rows)
