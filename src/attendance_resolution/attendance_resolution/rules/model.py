from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from ..core.enums import RuleType


@dataclass(frozen=True)
class CustomShiftParams:
    shift_start: Optional[str] = None
    shift_end: Optional[str] = None


@dataclass(frozen=True)
class ExemptParams:
    leave_type: Optional[str] = None

    @property
    def is_official(self) -> bool:
        return (self.leave_type or "").strip().lower() == "official"


@dataclass(frozen=True)
class OvernightStayParams:
    pass


@dataclass(frozen=True)
class GenericParams:
    """Payload of a rule type the engine does not interpret."""

    raw: Mapping[str, Any] = field(default_factory=dict)


RuleParams = Union[CustomShiftParams, ExemptParams, OvernightStayParams, GenericParams]


def _text(payload: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_rule_params(rule_type: str, payload: Optional[Mapping[str, Any]]) -> RuleParams:
    """Parse a stored params payload once, keyed by rule type.

    Accepts both camelCase (as sent by the UI) and snake_case keys.
    """

    payload = dict(payload or {})
    if rule_type == RuleType.CUSTOM_SHIFT.value:
        return CustomShiftParams(
            shift_start=_text(payload, "shiftStart", "shift_start"),
            shift_end=_text(payload, "shiftEnd", "shift_end"),
        )
    if rule_type == RuleType.ATTENDANCE_EXEMPT.value:
        return ExemptParams(leave_type=_text(payload, "leaveType", "leave_type"))
    if rule_type == RuleType.OVERNIGHT_STAY.value:
        return OvernightStayParams()
    return GenericParams(raw=payload)


def params_to_dict(params: RuleParams) -> Dict[str, Any]:
    """Inverse of ``parse_rule_params``: the camelCase payload stored and returned by the API."""

    if isinstance(params, CustomShiftParams):
        payload = {"shiftStart": params.shift_start, "shiftEnd": params.shift_end}
        return {k: v for k, v in payload.items() if v is not None}
    if isinstance(params, ExemptParams):
        return {"leaveType": params.leave_type} if params.leave_type is not None else {}
    if isinstance(params, GenericParams):
        return dict(params.raw)
    return {}


@dataclass(frozen=True)
class SpecialRule:
    """Domain entity: a scoped, dated, prioritized exception rule."""

    rule_id: Optional[int]
    name: str
    scope: str
    rule_type: str
    start_date: date
    end_date: date
    priority: int = 0
    params: RuleParams = field(default_factory=GenericParams)

    @classmethod
    def create(
        cls,
        *,
        rule_id: Optional[int],
        rule_type: str,
        start_date: date,
        end_date: date,
        scope: str = "all",
        name: str = "",
        priority: int = 0,
        params: Optional[Dict[str, Any]] = None,
    ) -> "SpecialRule":
        return cls(
            rule_id=rule_id,
            name=name,
            scope=scope,
            rule_type=rule_type,
            start_date=start_date,
            end_date=end_date,
            priority=int(priority or 0),
            params=parse_rule_params(rule_type, params),
        )

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def is_type(self, rule_type: RuleType) -> bool:
        return self.rule_type == rule_type.value

    def to_dict(self) -> dict:
        return {
            "id": self.rule_id,
            "name": self.name,
            "scope": self.scope,
            "ruleType": self.rule_type,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "priority": self.priority,
            "params": params_to_dict(self.params),
        }
