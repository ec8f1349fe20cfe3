from datetime import date

from src.attendance_resolution.attendance_resolution.core.enums import ShiftSource
from src.attendance_resolution.attendance_resolution.rules.model import SpecialRule
from src.attendance_resolution.attendance_resolution.shifts.resolver import ShiftResolver

MONDAY = date(2024, 6, 3)
SATURDAY = date(2024, 6, 8)


def _custom_shift(rule_id, *, start, end, priority=0, scope="all", name=""):
    return SpecialRule.create(
        rule_id=rule_id,
        name=name,
        scope=scope,
        rule_type="custom_shift",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 30),
        priority=priority,
        params={"shiftStart": start, "shiftEnd": end},
    )


def test_weekday_default(make_employee):
    shift = ShiftResolver().resolve(make_employee(), MONDAY, [])

    assert (shift.start, shift.end, shift.source) == ("09:00", "17:00", ShiftSource.NORMAL_DEFAULT)
    assert shift.trace == "Shift 09:00-17:00 (Normal Default)"


def test_saturday_default(make_employee):
    shift = ShiftResolver().resolve(make_employee(), SATURDAY, [])

    assert (shift.start, shift.end, shift.source) == ("10:00", "16:00", ShiftSource.SATURDAY_DEFAULT)


def test_highest_priority_custom_shift_wins(make_employee):
    rules = [
        _custom_shift(1, start="08:00", end="14:00", priority=1),
        _custom_shift(2, start="10:00", end="15:00", priority=5),
    ]

    shift = ShiftResolver().resolve(make_employee(), MONDAY, rules)

    assert (shift.start, shift.end, shift.source) == ("10:00", "15:00", ShiftSource.RULE_OVERRIDE)


def test_equal_priority_keeps_input_order(make_employee):
    rules = [
        _custom_shift(1, start="08:00", end="14:00", priority=3),
        _custom_shift(2, start="10:00", end="15:00", priority=3),
    ]

    shift = ShiftResolver().resolve(make_employee(), MONDAY, rules)

    assert shift.start == "08:00"


def test_rule_outside_scope_or_dates_is_ignored(make_employee):
    rules = [
        _custom_shift(1, start="08:00", end="14:00", scope="dept:Sales"),
        SpecialRule.create(
            rule_id=2,
            rule_type="custom_shift",
            start_date=date(2024, 7, 1),
            end_date=date(2024, 7, 31),
            params={"shiftStart": "07:00", "shiftEnd": "13:00"},
        ),
    ]

    shift = ShiftResolver().resolve(make_employee(department="Ops"), MONDAY, rules)

    assert shift.source == ShiftSource.NORMAL_DEFAULT


def test_custom_shift_missing_end_keeps_default_end(make_employee):
    rule = SpecialRule.create(
        rule_id=1,
        rule_type="custom_shift",
        start_date=MONDAY,
        end_date=MONDAY,
        params={"shift_start": "10:30"},
    )

    shift = ShiftResolver().resolve(make_employee(), MONDAY, [rule])

    assert (shift.start, shift.end) == ("10:30", "17:00")
