from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

from ..common.validators import coerce_int, require_date_range, require_iso_date, require_non_empty
from ..core.enums import RuleType
from ..core.exceptions import NotFoundError, ValidationError
from .model import SpecialRule
from .repository import RuleRepository

logger = logging.getLogger(__name__)

RULE_TYPES = tuple(t.value for t in RuleType)


def rule_from_payload(payload: Mapping[str, Any], *, rule_id: int | None = None) -> SpecialRule:
    """Validate an API payload (camelCase keys) into a ``SpecialRule``."""

    if not isinstance(payload, Mapping):
        raise ValidationError("Rule must be a JSON object")

    name = require_non_empty(str(payload.get("name") or ""), "name")
    rule_type = str(payload.get("ruleType") or "").strip()
    if rule_type not in RULE_TYPES:
        raise ValidationError(f"ruleType must be one of: {', '.join(RULE_TYPES)}")

    start = require_iso_date(str(payload.get("startDate") or ""), "startDate")
    end = require_iso_date(str(payload.get("endDate") or ""), "endDate")
    require_date_range(start, end)

    params = payload.get("params")
    if params is not None and not isinstance(params, Mapping):
        raise ValidationError("params must be a JSON object")

    return SpecialRule.create(
        rule_id=rule_id,
        name=name,
        scope=str(payload.get("scope") or "all").strip() or "all",
        rule_type=rule_type,
        start_date=start,
        end_date=end,
        priority=coerce_int(payload.get("priority"), "priority", default=0),
        params=dict(params or {}),
    )


class RuleService:
    def __init__(self, rules: RuleRepository):
        self._rules = rules

    def list_rules(self) -> Sequence[SpecialRule]:
        return self._rules.list_all()

    def create(self, payload: Mapping[str, Any]) -> SpecialRule:
        [created] = self._rules.create_many([rule_from_payload(payload)])
        logger.info("Created rule %s (%s, scope=%s)", created.rule_id, created.rule_type, created.scope)
        return created

    def update(self, rule_id: int, payload: Mapping[str, Any]) -> SpecialRule:
        existing = self._rules.get(int(rule_id))
        if existing is None:
            raise NotFoundError(f"Rule {rule_id} not found")

        # Partial update: fields missing from the payload keep their stored value.
        merged = {**existing.to_dict(), **dict(payload or {})}
        rule = rule_from_payload(merged, rule_id=existing.rule_id)
        self._rules.update(rule)
        logger.info("Updated rule %s", rule.rule_id)
        return rule

    def delete(self, rule_id: int) -> None:
        if not self._rules.delete(int(rule_id)):
            raise NotFoundError(f"Rule {rule_id} not found")
        logger.info("Deleted rule %s", rule_id)

    def import_rules(self, payloads: Sequence[Any]) -> Sequence[SpecialRule]:
        """All-or-nothing: one invalid entry rejects the whole batch."""

        rules: List[SpecialRule] = []
        for index, payload in enumerate(payloads, start=1):
            try:
                rules.append(rule_from_payload(payload))
            except ValidationError as e:
                raise ValidationError(f"Invalid rule format at #{index}: {e}")

        created = self._rules.create_many(rules) if rules else []
        logger.info("Imported %d rules", len(created))
        return created
