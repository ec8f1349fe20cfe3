from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..core.constants import NOTE_OVERNIGHT_STAY, NOTE_SEPARATOR

_SPLIT = re.compile(r"[،,]")


def append_notes(existing: Optional[str], additions: Iterable[str]) -> str:
    """Merge note fragments, dropping blanks and duplicates, keeping first-seen order."""

    merged: List[str] = []
    for note in [*_SPLIT.split(existing or ""), *additions]:
        note = (note or "").strip()
        if note and note not in merged:
            merged.append(note)
    return NOTE_SEPARATOR.join(merged)


def compose_daily_notes(
    *,
    base_notes: Optional[str],
    extra_notes: Iterable[str] = (),
    leave_notes: Iterable[str] = (),
    has_overnight_stay: bool = False,
) -> str:
    if has_overnight_stay:
        return NOTE_OVERNIGHT_STAY
    return append_notes(base_notes, [*extra_notes, *leave_notes])
