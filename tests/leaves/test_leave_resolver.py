from datetime import date

from src.attendance_resolution.attendance_resolution.leaves.model import Leave, OfficialHoliday
from src.attendance_resolution.attendance_resolution.leaves.resolver import LeaveResolver
from src.attendance_resolution.attendance_resolution.rules.model import SpecialRule

DAY = date(2024, 6, 4)


def _leave(leave_type="annual", scope="all", scope_value=None, note=None):
    return Leave(
        leave_type=leave_type,
        scope=scope,
        scope_value=scope_value,
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 10),
        note=note,
    )


def test_no_leave_is_not_a_leave_day(make_employee):
    resolution = LeaveResolver().resolve(make_employee(), DAY, [])

    assert not resolution.is_leave_day
    assert resolution.category is None


def test_hr_leave_for_everyone(make_employee):
    resolution = LeaveResolver([_leave(note="جرد سنوي")]).resolve(make_employee(), DAY, [])

    assert resolution.is_leave_day
    assert resolution.category == "HR Leave"
    assert resolution.notes == ("جرد سنوي",)
    assert not resolution.official


def test_official_leave_type_is_official(make_employee):
    resolution = LeaveResolver([_leave(leave_type="official")]).resolve(make_employee(), DAY, [])

    assert resolution.official
    assert resolution.category == "Official Leave"


def test_leave_outside_dates_does_not_apply(make_employee):
    resolution = LeaveResolver([_leave()]).resolve(make_employee(), date(2024, 6, 11), [])

    assert not resolution.is_leave_day


def test_scoped_leaves(make_employee):
    emp = make_employee("031", sector="Retail", department="Sales", section="North", branch="Giza")
    resolver = LeaveResolver()

    assert resolver.applies(_leave(scope="sector", scope_value="Retail"), emp, DAY)
    assert resolver.applies(_leave(scope="department", scope_value="Sales"), emp, DAY)
    assert resolver.applies(_leave(scope="section", scope_value="North"), emp, DAY)
    assert resolver.applies(_leave(scope="branch", scope_value="Giza"), emp, DAY)
    assert resolver.applies(_leave(scope="emp", scope_value="31"), emp, DAY)
    assert not resolver.applies(_leave(scope="branch", scope_value="Cairo"), emp, DAY)
    assert not resolver.applies(_leave(scope="region", scope_value="Giza"), emp, DAY)


def test_collections_leave_only_for_collections_sector(make_employee):
    leave = _leave(leave_type="collections")
    resolver = LeaveResolver([leave])

    assert resolver.resolve(make_employee(sector="التحصيل"), DAY, []).is_leave_day
    assert not resolver.resolve(make_employee(sector="المبيعات"), DAY, []).is_leave_day


def test_attendance_exempt_rule_makes_a_leave_day(make_employee):
    rule = SpecialRule.create(
        rule_id=1,
        rule_type="attendance_exempt",
        start_date=DAY,
        end_date=DAY,
        params={"leaveType": "official"},
    )

    resolution = LeaveResolver().resolve(make_employee(), DAY, [rule])

    assert resolution.is_leave_day
    assert resolution.official


def test_holiday_lookup():
    resolver = LeaveResolver(holidays=[OfficialHoliday(date=DAY, name="عيد")])

    assert resolver.holiday_for(DAY).name == "عيد"
    assert resolver.holiday_for(date(2024, 6, 5)) is None
