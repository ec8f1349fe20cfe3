"""Normalization of adjustment rows coming from HR sheets.

Type labels arrive with spelling variants (hamza forms, taa marbuta, tashkeel),
so they are folded to a plain form before being looked up in the alias table.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import AdjustmentType

_ARABIC_DIACRITICS = re.compile(r"[\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06ED]")
_WHITESPACE = re.compile(r"\s+")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_LETTER_FOLDS = str.maketrans({
    "إ": "ا",
    "أ": "ا",
    "آ": "ا",
    "ى": "ي",
    "ؤ": "و",
    "ئ": "ي",
    "ة": "ه",
})

_DATE_FORMATS = ("%Y/%m/%d", "%d/%m/%Y", "%d-%m-%Y", "%m/%d/%Y")


def fold_arabic(value: Any) -> str:
    text = str(value if value is not None else "").translate(_LETTER_FOLDS)
    text = _ARABIC_DIACRITICS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


_ALIASES = {
    "اذن صباحي": AdjustmentType.MORNING_PERMISSION,
    "إذن صباحي": AdjustmentType.MORNING_PERMISSION,
    "اذن مسائي": AdjustmentType.EVENING_PERMISSION,
    "إذن مسائي": AdjustmentType.EVENING_PERMISSION,
    "إجازة نص يوم": AdjustmentType.HALF_DAY_LEAVE,
    "إجازة نصف يوم": AdjustmentType.HALF_DAY_LEAVE,
    "مأمورية": AdjustmentType.MISSION,
    "إجازة بالخصم": AdjustmentType.LEAVE_DEDUCTION,
    "غياب بعذر": AdjustmentType.EXCUSED_ABSENCE,
}
_LOOKUP = {fold_arabic(k): v for k, v in _ALIASES.items()}
_LOOKUP.update({fold_arabic(t.value): t for t in AdjustmentType})


def parse_adjustment_type(value: Any) -> Optional[AdjustmentType]:
    if isinstance(value, AdjustmentType):
        return value
    return _LOOKUP.get(fold_arabic(value))


def normalize_effect_type(value: Any) -> str:
    """Canonical label for known types, the folded text otherwise."""

    kind = parse_adjustment_type(value)
    if kind is not None:
        return kind.value
    return fold_arabic(value)


def normalize_effect_date_key(value: Any) -> str:
    """``YYYY-MM-DD`` for anything date-like, empty string when unparseable."""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value if value is not None else "").strip()
    if not text:
        return ""
    if _ISO_DATE.match(text):
        try:
            return datetime.strptime(text, "%Y-%m-%d").date().isoformat()
        except ValueError:
            return ""
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    return ""


def normalize_effect_time_key(value: Any) -> str:
    """``HH:MM`` for ``H[:M[:S]]`` input, empty string when unparseable."""

    text = str(value if value is not None else "").strip()
    if not text:
        return ""
    parts = text.split(":")
    try:
        hour = int(float(parts[0] or "0"))
        minute = int(float(parts[1] or "0")) if len(parts) > 1 else 0
    except (ValueError, OverflowError):
        return ""
    return f"{hour:02d}:{minute:02d}"


def effect_key(employee_code: Any, day: Any, kind: Any, from_time: Any, to_time: Any) -> str:
    """Identity of an adjustment row; two rows with the same key describe the same effect."""

    return "|".join((
        str(employee_code or "").strip(),
        normalize_effect_date_key(day),
        normalize_effect_type(kind),
        normalize_effect_time_key(from_time),
        normalize_effect_time_key(to_time),
    ))
