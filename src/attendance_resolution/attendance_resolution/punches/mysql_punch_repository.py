from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from ..common.datetime_utils import as_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import BiometricPunch
from .repository import PunchRepository


class MySQLPunchRepository(PunchRepository):
    """Punches are stored as UTC DATETIME values."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[BiometricPunch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_code, punch_datetime
                FROM biometric_punches
                WHERE punch_datetime BETWEEN %s AND %s
                ORDER BY punch_id
                """,
                (as_utc(start).replace(tzinfo=None), as_utc(end).replace(tzinfo=None)),
            )
            return [
                BiometricPunch(
                    employee_code=str(r["employee_code"]),
                    punch_datetime=r["punch_datetime"].replace(tzinfo=timezone.utc),
                )
                for r in fetchall(cur)
            ]
