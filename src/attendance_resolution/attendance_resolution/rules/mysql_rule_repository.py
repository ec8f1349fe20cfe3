from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import SpecialRule, params_to_dict
from .repository import RuleRepository

_COLUMNS = "rule_id, name, scope, rule_type, start_date, end_date, priority, params"


def _load_params(raw: Any) -> Dict[str, Any]:
    parsed = load_json_column(raw, default={})
    return parsed if isinstance(parsed, dict) else {}


def _to_rule(r: Dict[str, Any]) -> SpecialRule:
    return SpecialRule.create(
        rule_id=int(r["rule_id"]),
        name=r.get("name") or "",
        scope=r.get("scope") or "all",
        rule_type=r["rule_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        priority=int(r.get("priority") or 0),
        params=_load_params(r.get("params")),
    )


def _write_params(rule: SpecialRule) -> tuple:
    return (
        rule.name,
        rule.scope,
        rule.rule_type,
        rule.start_date,
        rule.end_date,
        int(rule.priority),
        json.dumps(params_to_dict(rule.params), ensure_ascii=False),
    )


class MySQLRuleRepository(RuleRepository):
    """Rule params are stored as a JSON document per row."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SpecialRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM special_rules ORDER BY rule_id")
            return [_to_rule(r) for r in fetchall(cur)]

    def get(self, rule_id: int) -> Optional[SpecialRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM special_rules WHERE rule_id=%s", (int(rule_id),))
            r = fetchone(cur)
            return _to_rule(r) if r else None

    def create_many(self, rules: Sequence[SpecialRule]) -> Sequence[SpecialRule]:
        created = []
        # One transaction: a failing row rolls the whole batch back.
        with db_cursor(self._conn_factory) as (_, cur):
            for rule in rules:
                cur.execute(
                    """
                    INSERT INTO special_rules(name, scope, rule_type, start_date, end_date, priority, params)
                    VALUES (%s,%s,%s,%s,%s,%s,%s)
                    """,
                    _write_params(rule),
                )
                created.append(replace(rule, rule_id=int(cur.lastrowid)))
        return created

    def update(self, rule: SpecialRule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE special_rules
                SET name=%s, scope=%s, rule_type=%s, start_date=%s, end_date=%s, priority=%s, params=%s
                WHERE rule_id=%s
                """,
                _write_params(rule) + (int(rule.rule_id),),
            )
            return cur.rowcount > 0

    def delete(self, rule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM special_rules WHERE rule_id=%s", (int(rule_id),))
            return cur.rowcount > 0
