from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import List, Optional

from ...adjustments.engine import compute_adjustment_effects
from ...common.datetime_utils import SECONDS_PER_DAY, seconds_to_hms
from ...core.constants import (
    ABSENCE_PENALTY,
    EARLY_LEAVE_PENALTY,
    LATE_BASE_PENALTY,
    LATE_TIERS,
    MISSING_CHECKOUT_PENALTY,
    NOTE_MISSING_CHECKIN,
    OVERTIME_START_OFFSET_SECONDS,
)
from ...core.enums import AttendanceStatus, PenaltyType
from ..model import AttendanceRecord, Penalty
from ..notes import compose_daily_notes
from .base import DayContext, DayStrategy, base_record


def late_penalty_for(minutes: int) -> float:
    for threshold, value in LATE_TIERS:
        if minutes > threshold:
            return value
    return LATE_BASE_PENALTY


def automatic_notes(
    *,
    check_in_exists: bool,
    check_out_exists: bool,
    checkout_before_threshold: bool,
    excused: bool,
) -> List[str]:
    notes: List[str] = []
    if check_in_exists and not check_out_exists and not excused:
        notes.append(PenaltyType.MISSING_CHECKOUT.value)
    if not check_in_exists and check_out_exists and not excused:
        notes.append(NOTE_MISSING_CHECKIN)
    if check_out_exists and checkout_before_threshold and not excused:
        notes.append(PenaltyType.EARLY_LEAVE.value)
    return notes


def _hours(start: datetime, end: datetime) -> float:
    return max(0.0, (end - start).total_seconds()) / 3600


class WorkdayStrategy(DayStrategy):
    """A normal working day with punches and/or adjustments.

    Times are compared as local wall-clock datetimes anchored on the day, so a
    checkout moved over from after midnight stays later than the shift end.
    """

    def applies(self, ctx: DayContext) -> bool:
        return bool(ctx.punches or ctx.adjustments)

    def decide(self, ctx: DayContext) -> AttendanceRecord:
        overnight_stay = ctx.has_overnight_stay
        check_in = ctx.check_in
        check_out = ctx.check_out

        check_in_s = ctx.seconds_since_midnight(check_in) if check_in else None
        check_out_s = ctx.seconds_since_midnight(check_out) if check_out and not overnight_stay else None

        effects = compute_adjustment_effects(
            ctx.shift.start,
            ctx.shift.end,
            ctx.adjustments,
            check_in_s,
            check_out_s,
        )

        eff_start = ctx.at(effects.effective_shift_start_seconds)
        eff_end = ctx.at(effects.effective_shift_end_seconds)
        check_in_at: Optional[datetime] = check_in.local.wall_clock if check_in else None
        check_out_at: Optional[datetime] = check_out.local.wall_clock if check_out and not overnight_stay else None

        has_mission = effects.has_mission
        excused_day = (effects.half_day_excused and check_in is None and check_out is None) or has_mission
        excused = excused_day or effects.suppress_penalties or overnight_stay

        status = AttendanceStatus.PRESENT
        penalties: List[Penalty] = []
        late_value = 0.0
        late_minutes = 0

        if not excused and check_in_at is not None:
            diff = (check_in_at - eff_start).total_seconds()
            late_minutes = max(0, math.ceil(diff / 60))
            if diff > ctx.grace.total_seconds():
                status = AttendanceStatus.LATE
                late_value = late_penalty_for(late_minutes)
        elif not excused and check_in is None and check_out is None:
            status = AttendanceStatus.ABSENT
            penalties.append(Penalty(type=PenaltyType.ABSENCE.value, value=ABSENCE_PENALTY))

        if overnight_stay:
            status = AttendanceStatus.PRESENT

        early_threshold = eff_end - ctx.grace
        checkout_before_threshold = check_out_at is not None and check_out_at < early_threshold
        missing_checkout = check_in is not None and check_out_at is None and not excused
        early_leave = checkout_before_threshold and not missing_checkout and not excused

        if not excused:
            if late_value > 0:
                penalties.append(Penalty(type=PenaltyType.LATE.value, value=late_value, minutes=late_minutes))
            if missing_checkout:
                penalties.append(Penalty(type=PenaltyType.MISSING_CHECKOUT.value, value=MISSING_CHECKOUT_PENALTY))
            elif early_leave:
                penalties.append(Penalty(type=PenaltyType.EARLY_LEAVE.value, value=EARLY_LEAVE_PENALTY))

        if excused_day:
            reaches_end = has_mission and effects.mission_end_seconds >= ctx.shift.end_seconds
            status = AttendanceStatus.PRESENT if reaches_end else AttendanceStatus.EXCUSED

        # Worked time.
        total_hours = 0.0
        has_stamps = effects.first_stamp_seconds is not None and effects.last_stamp_seconds is not None
        if has_mission and has_stamps:
            total_hours = max(0, effects.last_stamp_seconds - effects.first_stamp_seconds) / 3600
        elif check_in_at is not None and check_out_at is not None:
            total_hours = _hours(check_in_at, check_out_at)
        elif has_stamps:
            total_hours = max(0, effects.last_stamp_seconds - effects.first_stamp_seconds) / 3600

        next_day_start = ctx.at(SECONDS_PER_DAY + effects.effective_shift_start_seconds)
        worked_until = next_day_start if overnight_stay else check_out_at
        if overnight_stay and check_in_at is not None:
            total_hours = _hours(check_in_at, next_day_start)

        overtime_hours = 0
        if worked_until is not None:
            overtime_start = eff_end + timedelta(seconds=OVERTIME_START_OFFSET_SECONDS)
            capped = min(worked_until, next_day_start)
            if capped > overtime_start:
                overtime_hours = int((capped - overtime_start).total_seconds() // 3600)

        auto = automatic_notes(
            check_in_exists=check_in is not None,
            check_out_exists=check_out is not None,
            checkout_before_threshold=checkout_before_threshold,
            excused=excused_day or overnight_stay,
        )
        notes = compose_daily_notes(
            base_notes=None,
            extra_notes=[*auto, *ctx.extra_notes, ctx.shift.trace],
            leave_notes=ctx.leave.notes,
            has_overnight_stay=overnight_stay,
        )

        return base_record(
            ctx,
            status,
            check_out=None if overnight_stay else (check_out.instant if check_out else None),
            total_hours=round(total_hours, 2),
            overtime_hours=overtime_hours,
            penalties=tuple(penalties),
            notes=notes,
            mission_start=seconds_to_hms(effects.mission_start_seconds) if has_mission else None,
            mission_end=seconds_to_hms(effects.mission_end_seconds) if has_mission else None,
            half_day_excused=effects.half_day_excused,
        )
