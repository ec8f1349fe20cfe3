from dataclasses import replace
from datetime import date

import pytest

from src.attendance_resolution.attendance_resolution.core.exceptions import NotFoundError, ValidationError
from src.attendance_resolution.attendance_resolution.rules.model import CustomShiftParams, GenericParams
from src.attendance_resolution.attendance_resolution.rules.service import RuleService, rule_from_payload


class FakeRules:
    def __init__(self, rules=()):
        self.rules = {r.rule_id: r for r in rules}
        self.batches = []

    def list_all(self):
        return list(self.rules.values())

    def get(self, rule_id):
        return self.rules.get(rule_id)

    def create_many(self, rules):
        self.batches.append(list(rules))
        created = []
        for rule in rules:
            rule = replace(rule, rule_id=len(self.rules) + 1)
            self.rules[rule.rule_id] = rule
            created.append(rule)
        return created

    def update(self, rule):
        self.rules[rule.rule_id] = rule
        return True

    def delete(self, rule_id):
        return self.rules.pop(rule_id, None) is not None


RAMADAN = {
    "name": "رمضان",
    "ruleType": "custom_shift",
    "scope": "dept:مبيعات",
    "startDate": "2024-03-11",
    "endDate": "2024-04-09",
    "priority": "5",
    "params": {"shiftStart": "10:00", "shiftEnd": "15:00"},
}


def test_rule_from_payload_parses_typed_params():
    rule = rule_from_payload(RAMADAN)

    assert rule.rule_id is None
    assert rule.priority == 5
    assert (rule.start_date, rule.end_date) == (date(2024, 3, 11), date(2024, 4, 9))
    assert rule.params == CustomShiftParams(shift_start="10:00", shift_end="15:00")
    assert rule.to_dict()["params"] == {"shiftStart": "10:00", "shiftEnd": "15:00"}


def test_rule_from_payload_keeps_uninterpreted_params():
    rule = rule_from_payload({**RAMADAN, "ruleType": "penalty_override", "params": {"waive": True}, "scope": ""})

    assert rule.scope == "all"
    assert rule.params == GenericParams(raw={"waive": True})


@pytest.mark.parametrize(
    "override",
    [
        {"name": " "},
        {"ruleType": "holiday"},
        {"startDate": "2024-04-31"},
        {"endDate": "2024-03-01"},
        {"priority": "high"},
        {"params": ["10:00"]},
    ],
)
def test_rule_from_payload_rejects_bad_fields(override):
    with pytest.raises(ValidationError):
        rule_from_payload({**RAMADAN, **override})


def test_create_update_delete_cycle():
    repo = FakeRules()
    service = RuleService(repo)

    created = service.create(RAMADAN)
    updated = service.update(created.rule_id, {"priority": 9, "scope": "emp:1001"})

    assert created.rule_id == 1
    assert (updated.priority, updated.scope, updated.name) == (9, "emp:1001", "رمضان")
    assert repo.get(1).priority == 9
    assert updated.params == CustomShiftParams(shift_start="10:00", shift_end="15:00")

    service.delete(1)
    assert service.list_rules() == []


def test_update_and_delete_unknown_rule():
    service = RuleService(FakeRules())

    with pytest.raises(NotFoundError):
        service.update(7, {"priority": 1})
    with pytest.raises(NotFoundError):
        service.delete(7)


def test_import_rules_is_all_or_nothing():
    repo = FakeRules()
    service = RuleService(repo)

    with pytest.raises(ValidationError, match="#2"):
        service.import_rules([RAMADAN, {**RAMADAN, "ruleType": "?"}])
    assert repo.batches == []

    created = service.import_rules([RAMADAN, {**RAMADAN, "ruleType": "overnight_stay", "params": None}])
    assert [r.rule_id for r in created] == [1, 2]
    assert len(repo.batches) == 1
