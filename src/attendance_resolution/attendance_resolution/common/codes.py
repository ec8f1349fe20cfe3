from __future__ import annotations

from typing import Any


def normalize_emp_code(value: Any) -> str:
    """Canonical employee code: trimmed, leading zeros stripped from numeric codes.

    "031" and " 31 " both become "31"; "000" becomes "0"; non-numeric codes are only trimmed.
    """

    trimmed = str(value if value is not None else "").strip()
    if not trimmed:
        return ""
    if trimmed.isdigit():
        return trimmed.lstrip("0") or "0"
    return trimmed
