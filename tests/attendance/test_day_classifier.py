from datetime import date

from src.attendance_resolution.attendance_resolution.adjustments.model import Adjustment
from src.attendance_resolution.attendance_resolution.attendance.classifier import DayClassifier
from src.attendance_resolution.attendance_resolution.attendance.factory import DayStrategyFactory
from src.attendance_resolution.attendance_resolution.attendance.strategies.absent_strategy import AbsentStrategy
from src.attendance_resolution.attendance_resolution.attendance.strategies.base import DayContext
from src.attendance_resolution.attendance_resolution.attendance.strategies.excused_absence_strategy import (
    ExcusedAbsenceStrategy,
)
from src.attendance_resolution.attendance_resolution.attendance.strategies.leave_deduction_strategy import (
    LeaveDeductionStrategy,
)
from src.attendance_resolution.attendance_resolution.attendance.strategies.rest_day_strategy import RestDayStrategy
from src.attendance_resolution.attendance_resolution.attendance.strategies.termination_strategy import (
    TerminationPeriodStrategy,
)
from src.attendance_resolution.attendance_resolution.attendance.strategies.workday_strategy import (
    WorkdayStrategy,
    late_penalty_for,
)
from src.attendance_resolution.attendance_resolution.core.enums import AttendanceStatus, ShiftSource
from src.attendance_resolution.attendance_resolution.leaves.model import OfficialHoliday
from src.attendance_resolution.attendance_resolution.punches.model import LocalPunch
from src.attendance_resolution.attendance_resolution.shifts.model import ShiftWindow

MON = date(2024, 6, 3)
FRI = date(2024, 6, 7)
SHIFT = ShiftWindow(start="09:00", end="17:00", source=ShiftSource.NORMAL_DEFAULT)


def _ctx(employee, day=MON, *, punches=(), adjustments=(), holiday=None):
    return DayContext(
        employee=employee,
        day=day,
        shift=SHIFT,
        punches=tuple(LocalPunch.of(p, -120) for p in punches),
        adjustments=tuple(adjustments),
        holiday=holiday,
    )


def test_factory_falls_back_to_absent(make_employee):
    assert isinstance(DayStrategyFactory().for_day(_ctx(make_employee())), AbsentStrategy)


def test_factory_picks_workday_when_punched(make_employee, punch_at):
    ctx = _ctx(make_employee(), punches=[punch_at("1001", MON, "09:00")])

    assert isinstance(DayStrategyFactory().for_day(ctx), WorkdayStrategy)


def test_termination_beats_everything(make_employee, punch_at):
    ctx = _ctx(
        make_employee(termination_date=MON),
        FRI,
        punches=[punch_at("1001", FRI, "11:00")],
        holiday=OfficialHoliday(date=FRI, name="عيد"),
    )

    assert isinstance(DayStrategyFactory().for_day(ctx), TerminationPeriodStrategy)


def test_rest_day_beats_leave_deduction(make_employee):
    adj = Adjustment(employee_code="1001", date=FRI, type="إجازة بالخصم")

    assert isinstance(DayStrategyFactory().for_day(_ctx(make_employee(), FRI, adjustments=[adj])), RestDayStrategy)


def test_leave_deduction_beats_excused_absence(make_employee):
    adjs = [
        Adjustment(employee_code="1001", date=MON, type="غياب بعذر"),
        Adjustment(employee_code="1001", date=MON, type="إجازة بالخصم"),
    ]

    assert isinstance(DayStrategyFactory().for_day(_ctx(make_employee(), adjustments=adjs)), LeaveDeductionStrategy)


def test_excused_absence_beats_workday(make_employee, punch_at):
    adj = Adjustment(employee_code="1001", date=MON, type="غياب بعذر")
    ctx = _ctx(make_employee(), punches=[punch_at("1001", MON, "09:00")], adjustments=[adj])

    assert isinstance(DayStrategyFactory().for_day(ctx), ExcusedAbsenceStrategy)


def test_custom_strategy_order(make_employee):
    factory = DayStrategyFactory(strategies=(AbsentStrategy(), WorkdayStrategy()))

    assert isinstance(factory.for_day(_ctx(make_employee())), AbsentStrategy)


def test_classifier_returns_record_for_the_day(make_employee):
    record = DayClassifier().classify(_ctx(make_employee("77")))

    assert record.employee_code == "77"
    assert record.date == MON
    assert record.status == AttendanceStatus.ABSENT


def test_late_penalty_tiers():
    assert late_penalty_for(16) == 0.25
    assert late_penalty_for(30) == 0.25
    assert late_penalty_for(31) == 0.5
    assert late_penalty_for(60) == 0.5
    assert late_penalty_for(61) == 1.0
