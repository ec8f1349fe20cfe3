from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Leave, OfficialHoliday
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_leaves(self) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT leave_id, type, scope, scope_value, start_date, end_date, note
                FROM leaves
                ORDER BY leave_id
                """
            )
            return [
                Leave(
                    leave_id=int(r["leave_id"]),
                    leave_type=r["type"],
                    scope=r.get("scope") or "all",
                    scope_value=r.get("scope_value"),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    note=r.get("note"),
                )
                for r in fetchall(cur)
            ]

    def list_official_holidays(self) -> Sequence[OfficialHoliday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT holiday_date, name FROM official_holidays ORDER BY holiday_date")
            return [OfficialHoliday(date=r["holiday_date"], name=r.get("name") or "") for r in fetchall(cur)]
