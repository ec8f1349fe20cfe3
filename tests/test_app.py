from src.attendance_resolution.attendance_resolution.main import create_app


def test_create_app_registers_api_routes(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("AUTO_INIT_DB", "0")
    monkeypatch.setenv("AUTO_SEED_DB", "0")

    app = create_app()

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert {
        "/api/attendance/process",
        "/api/attendance",
        "/api/attendance/export",
        "/api/adjustments/import",
        "/api/adjustments",
        "/api/rules",
        "/api/rules/<int:rule_id>",
        "/api/rules/import",
    } <= rules


def test_unknown_route_returns_json(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    res = create_app().test_client().get("/api/nope")

    assert res.status_code == 404
    assert "message" in res.get_json()
