from datetime import date
from types import SimpleNamespace

from flask import Flask

from src.attendance_resolution.attendance_resolution.attendance.controller import register as register_attendance
from src.attendance_resolution.attendance_resolution.core.exceptions import NotFoundError, ValidationError
from src.attendance_resolution.attendance_resolution.rules.controller import register as register_rules
from src.attendance_resolution.attendance_resolution.rules.model import SpecialRule


def _rule(rule_id=1, **fields):
    fields.setdefault("rule_type", "overnight_stay")
    return SpecialRule.create(
        rule_id=rule_id,
        name="مبيت",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 30),
        **fields,
    )


class FakeRuleService:
    def __init__(self):
        self.calls = []

    def list_rules(self):
        return [_rule()]

    def create(self, payload):
        self.calls.append(("create", payload))
        return _rule(5)

    def update(self, rule_id, payload):
        if rule_id == 404:
            raise NotFoundError("Rule 404 not found")
        self.calls.append(("update", rule_id, payload))
        return _rule(rule_id, priority=3)

    def delete(self, rule_id):
        if rule_id == 404:
            raise NotFoundError("Rule 404 not found")
        self.calls.append(("delete", rule_id))

    def import_rules(self, payloads):
        if any(not isinstance(p, dict) for p in payloads):
            raise ValidationError("Invalid rule format at #1")
        return [_rule(i) for i, _ in enumerate(payloads, start=1)]


def _client():
    app = Flask(__name__)
    app.config["TESTING"] = True
    container = SimpleNamespace(rule_service=FakeRuleService())
    register_attendance(app, container)
    register_rules(app, container)
    return app.test_client(), container


def test_list_and_create_rules():
    client, container = _client()

    listed = client.get("/api/rules")
    created = client.post("/api/rules", json={"name": "مبيت"})

    assert listed.get_json()[0]["ruleType"] == "overnight_stay"
    assert listed.get_json()[0]["startDate"] == "2024-06-01"
    assert created.status_code == 201
    assert created.get_json()["id"] == 5
    assert container.rule_service.calls == [("create", {"name": "مبيت"})]


def test_update_and_delete_rule():
    client, container = _client()

    updated = client.put("/api/rules/2", json={"priority": 3})
    deleted = client.delete("/api/rules/2")
    missing = client.delete("/api/rules/404")

    assert updated.get_json()["priority"] == 3
    assert deleted.status_code == 204
    assert missing.status_code == 404
    assert missing.get_json() == {"message": "Rule 404 not found"}
    assert container.rule_service.calls == [("update", 2, {"priority": 3}), ("delete", 2)]


def test_create_rule_requires_json_object():
    client, _ = _client()

    res = client.post("/api/rules", json=["not", "an", "object"])

    assert res.status_code == 400


def test_import_rules():
    client, _ = _client()

    ok = client.post("/api/rules/import", json=[{"name": "a"}, {"name": "b"}])
    bad_body = client.post("/api/rules/import", json={"name": "a"})
    bad_entry = client.post("/api/rules/import", json=["a"])

    assert ok.get_json() == {"message": "Imported rules", "count": 2}
    assert bad_body.status_code == 400
    assert bad_entry.status_code == 400
