from __future__ import annotations

from ...core.constants import FRIDAY_WINDOWS, OFFICIAL_LEAVE_CATEGORY
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from ..notes import append_notes, compose_daily_notes
from .base import DayContext, DayStrategy, base_record, punch_span_hours


def attended_friday(ctx: DayContext) -> bool:
    # Validation windows only; they never change the shift or penalties.
    return ctx.is_friday and any(
        lo <= p.local.seconds_of_day <= hi for p in ctx.punches for lo, hi in FRIDAY_WINDOWS
    )


class RestDayStrategy(DayStrategy):
    """Friday, leave days and official holidays.

    Worked Fridays and worked official holidays earn comp-day credit.
    """

    def applies(self, ctx: DayContext) -> bool:
        return ctx.is_friday or ctx.leave.is_leave_day or ctx.holiday is not None

    def decide(self, ctx: DayContext) -> AttendanceRecord:
        friday_attended = attended_friday(ctx)
        is_official = ctx.holiday is not None or (ctx.leave.is_leave_day and ctx.leave.official)
        worked_holiday = is_official and bool(ctx.punches)

        comp_friday = 1 if friday_attended else 0
        # A worked Friday that is also a holiday is credited once.
        comp_official = 1 if worked_holiday and not friday_attended else 0
        comp_total = comp_friday + comp_official

        if ctx.is_friday:
            status = AttendanceStatus.FRIDAY_ATTENDED if friday_attended else AttendanceStatus.FRIDAY
            total_hours = punch_span_hours(ctx) if friday_attended else 0.0
        else:
            status = AttendanceStatus.COMP_DAY
            total_hours = punch_span_hours(ctx)

        base_notes = None
        if ctx.holiday is not None:
            base_notes = append_notes(OFFICIAL_LEAVE_CATEGORY, [ctx.holiday.name])
        elif ctx.leave.is_leave_day:
            base_notes = ctx.leave.category

        return base_record(
            ctx,
            status,
            total_hours=total_hours,
            notes=compose_daily_notes(
                base_notes=base_notes,
                extra_notes=ctx.extra_notes,
                leave_notes=ctx.leave.notes,
                has_overnight_stay=ctx.has_overnight_stay,
            ),
            is_official_holiday=is_official,
            worked_on_official_holiday=worked_holiday,
            comp_days_friday=comp_friday,
            comp_days_official=comp_official,
            comp_days_total=comp_total,
            comp_day_credit=comp_total,
        )
