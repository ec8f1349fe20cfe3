"""Local-day bucketing and overnight reassignment of punches.

Two explicit passes per employee:

1. ``bucket`` groups punches by the local calendar day of their instant.
2. ``partition`` walks the requested days (plus the day after the range, whose
   early punches may close the last requested day) chronologically and moves
   post-midnight punches that are really the previous day's checkout onto
   that previous day, producing a new bucket map.

Pass 2 is strictly ordered: the decision for day D reads the bucket of D-1
as already changed by the decision for D-1.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Tuple

from ..common.datetime_utils import iter_days
from ..core.constants import (
    ARRIVAL_WINDOWS,
    DEFAULT_ARRIVAL_WINDOW_HOUR,
    DEFAULT_TIMEZONE_OFFSET_MINUTES,
    EARLY_SHIFT_MAX_START_HOUR,
    OVERNIGHT_LAST_HOUR,
)
from ..employees.model import Employee
from .model import BiometricPunch, LocalPunch

logger = logging.getLogger(__name__)

OVERNIGHT_CHECKOUT_NOTE = "خروج بعد منتصف الليل {time} ({day})"


@dataclass(frozen=True)
class PartitionedPunches:
    """Per-day punch buckets for one employee after overnight reassignment."""

    buckets: Mapping[date, Tuple[LocalPunch, ...]] = field(default_factory=dict)
    notes: Mapping[date, Tuple[str, ...]] = field(default_factory=dict)
    consumed: Mapping[date, frozenset] = field(default_factory=dict)

    def punches_for(self, day: date) -> Tuple[LocalPunch, ...]:
        consumed = self.consumed.get(day, frozenset())
        return tuple(p for p in self.buckets.get(day, ()) if p.punch.key not in consumed)

    def notes_for(self, day: date) -> Tuple[str, ...]:
        return self.notes.get(day, ())


class PunchPartitioner:
    def __init__(self, *, utc_offset_minutes: int = DEFAULT_TIMEZONE_OFFSET_MINUTES):
        self._offset = int(utc_offset_minutes)

    def bucket(self, punches: Iterable[BiometricPunch]) -> Dict[date, Tuple[LocalPunch, ...]]:
        grouped: Dict[date, List[LocalPunch]] = defaultdict(list)
        for punch in punches:
            local = LocalPunch.of(punch, self._offset)
            grouped[local.local.calendar_date].append(local)
        return {day: tuple(sorted(items, key=lambda p: p.instant)) for day, items in grouped.items()}

    def partition(
        self,
        employee: Employee,
        punches: Iterable[BiometricPunch],
        *,
        start: date,
        end: date,
    ) -> PartitionedPunches:
        initial = self.bucket(punches)
        working: Dict[date, List[LocalPunch]] = {day: list(items) for day, items in initial.items()}
        notes: Dict[date, List[str]] = defaultdict(list)
        consumed: Dict[date, set] = defaultdict(set)

        shift_hour = employee.shift_start_hour
        window_start, window_end = ARRIVAL_WINDOWS.get(shift_hour, ARRIVAL_WINDOWS[DEFAULT_ARRIVAL_WINDOW_HOUR])

        def is_normal_arrival(p: LocalPunch) -> bool:
            return window_start <= p.local.hour <= window_end

        def is_early_shift_edge(p: LocalPunch) -> bool:
            if shift_hour > EARLY_SHIFT_MAX_START_HOUR:
                return False
            return (p.local.hour == 4 and p.local.minute >= 30) or (p.local.hour == 5 and p.local.minute == 0)

        for day in iter_days(start, end + timedelta(days=1)):
            prev_day = day - timedelta(days=1)
            overnight = [p for p in working.get(day, []) if p.local.hour <= OVERNIGHT_LAST_HOUR]

            for punch in overnight:
                prev_punches = working.get(prev_day, [])
                if not prev_punches:
                    continue
                has_prev_checkout = len(prev_punches) > 1

                day_punches = working.get(day, [])
                has_normal_arrival = any(c is not punch and is_normal_arrival(c) for c in day_punches)

                if not has_prev_checkout and is_early_shift_edge(punch) and not has_normal_arrival:
                    # Early-shift arrival, not a late checkout.
                    continue

                if has_prev_checkout and not has_normal_arrival:
                    continue

                working[day] = [c for c in day_punches if c is not punch]
                working[prev_day] = sorted(prev_punches + [punch], key=lambda p: p.instant)
                notes[prev_day].append(OVERNIGHT_CHECKOUT_NOTE.format(time=punch.local.hhmm(), day=day.isoformat()))
                consumed[day].add(punch.punch.key)
                logger.debug(
                    "Moved punch %s of employee %s from %s to %s",
                    punch.local.hhmm(),
                    employee.code,
                    day,
                    prev_day,
                )

        return PartitionedPunches(
            buckets={day: tuple(items) for day, items in working.items() if items},
            notes={day: tuple(items) for day, items in notes.items()},
            consumed={day: frozenset(keys) for day, keys in consumed.items()},
        )
