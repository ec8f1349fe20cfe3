from __future__ import annotations

from typing import Iterable, Optional

from ..common.datetime_utils import time_to_seconds
from ..core.enums import AdjustmentType
from .model import Adjustment, AdjustmentEffects


def compute_adjustment_effects(
    shift_start: str,
    shift_end: str,
    adjustments: Iterable[Adjustment],
    check_in_seconds: Optional[int] = None,
    check_out_seconds: Optional[int] = None,
) -> AdjustmentEffects:
    """Fold a day's adjustments into its effective shift window.

    Effects accumulate in input order:

    - morning permission pushes the effective start forward by ``to - from``
    - evening permission pulls the effective end back by ``to - from``
    - half-day leave anchored on the shift start (or end) moves that edge and
      marks the day as half-day excused
    - missions widen a running ``[min(from), max(to)]`` window and suppress
      penalties

    Permission deltas are clamped at zero. Types without a window effect
    (leave deduction, excused absence, unknown labels) are ignored here.
    """

    shift_start_s = time_to_seconds(shift_start)
    shift_end_s = time_to_seconds(shift_end)
    eff_start = shift_start_s
    eff_end = shift_end_s
    mission_start: Optional[int] = None
    mission_end: Optional[int] = None
    suppress = False
    half_day = False

    for adj in adjustments:
        kind = adj.kind
        from_s = time_to_seconds(adj.from_time)
        to_s = time_to_seconds(adj.to_time)

        if kind == AdjustmentType.MORNING_PERMISSION:
            eff_start += max(0, to_s - from_s)
        elif kind == AdjustmentType.EVENING_PERMISSION:
            eff_end -= max(0, to_s - from_s)
        elif kind == AdjustmentType.HALF_DAY_LEAVE:
            if from_s == shift_start_s:
                eff_start = to_s
                half_day = True
            if to_s == shift_end_s:
                eff_end = from_s
                half_day = True
        elif kind == AdjustmentType.MISSION:
            mission_start = from_s if mission_start is None else min(mission_start, from_s)
            mission_end = to_s if mission_end is None else max(mission_end, to_s)
            suppress = True

    firsts = [v for v in (check_in_seconds, mission_start) if v is not None]
    lasts = [v for v in (check_out_seconds, mission_end) if v is not None]

    return AdjustmentEffects(
        effective_shift_start_seconds=eff_start,
        effective_shift_end_seconds=eff_end,
        mission_start_seconds=mission_start,
        mission_end_seconds=mission_end,
        suppress_penalties=suppress,
        half_day_excused=half_day,
        first_stamp_seconds=min(firsts) if firsts else None,
        last_stamp_seconds=max(lasts) if lasts else None,
    )
