from src.attendance_resolution.attendance_resolution.core.enums import ScopeKind
from src.attendance_resolution.attendance_resolution.rules.scope import (
    ALL_SCOPE,
    ScopeResolver,
    build_emp_scope,
    parse_rule_scope,
)


def test_parse_empty_and_all_give_all_scope():
    assert parse_rule_scope(None) == ALL_SCOPE
    assert parse_rule_scope("  ") == ALL_SCOPE
    assert parse_rule_scope("all") == ALL_SCOPE


def test_parse_emp_scope_normalizes_and_dedupes_codes():
    spec = parse_rule_scope("emp: 031, 31 ,0042,")

    assert spec.kind == ScopeKind.EMP
    assert spec.values == ("31", "42")


def test_parse_unknown_prefix_falls_back_to_all():
    assert parse_rule_scope("team:alpha") == ALL_SCOPE


def test_build_emp_scope():
    assert build_emp_scope(["007", "7", "12"]) == "emp:7,12"


def test_matches_by_department_and_sector(make_employee):
    resolver = ScopeResolver()
    sales = make_employee("1", department="Sales", sector="Retail")
    ops = make_employee("2", department="Ops", sector="Retail")

    assert resolver.matches("dept:Sales,Finance", sales)
    assert not resolver.matches("dept:Sales,Finance", ops)
    assert resolver.matches("sector:Retail", ops)
    assert resolver.matches("all", ops)
    assert resolver.matches("", ops)


def test_matches_emp_scope_ignores_leading_zeros(make_employee):
    resolver = ScopeResolver()

    assert resolver.matches("emp:0031", make_employee("31"))
    assert not resolver.matches("emp:0031", make_employee("310"))


def test_unknown_prefix_matches_nobody(make_employee):
    resolver = ScopeResolver()

    assert not resolver.matches("team:alpha", make_employee("1"))


def test_parsed_scope_is_cached_per_rule():
    resolver = ScopeResolver()

    first = resolver.spec_for("dept:Sales", rule_id=7)
    second = resolver.spec_for("dept:Sales", rule_id=7)

    assert first is second


def test_emp_scope_with_padded_duplicates():
    spec = parse_rule_scope("emp:031, 31 ,515")

    assert spec.values.count("31") == 1
    assert spec.values == ("31", "515")
