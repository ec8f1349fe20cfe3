from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional

SECONDS_PER_DAY = 86400


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def normalize_time_to_hms(value: Optional[str]) -> str:
    """Normalize "H:M[:S]" to zero-padded "HH:MM:SS".

    Missing parts count as zero; anything unparseable collapses to "00:00:00".
    """

    parts = (value or "").strip().split(":")
    numbers = []
    for raw in (parts + ["0", "0", "0"])[:3]:
        raw = raw.strip() or "0"
        try:
            numbers.append(int(float(raw)))
        except (ValueError, OverflowError):
            return "00:00:00"
    h, m, s = numbers
    return f"{h:02d}:{m:02d}:{s:02d}"


def time_to_seconds(value: Optional[str]) -> int:
    h, m, s = (int(p) for p in normalize_time_to_hms(value).split(":"))
    return h * 3600 + m * 60 + s


def seconds_to_hms(value: float) -> str:
    total = max(0, int(value))
    return f"{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"


def local_datetime(day: date, seconds_of_day: int) -> datetime:
    """Naive local wall-clock datetime for a seconds-of-day offset on ``day``.

    Offsets past 24h roll into the following day.
    """

    return datetime.combine(day, time()) + timedelta(seconds=seconds_of_day)


def as_utc(instant: datetime) -> datetime:
    """Absolute instant as an aware UTC datetime (naive values are taken as UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


@dataclass(frozen=True)
class LocalInstant:
    """An absolute instant seen through a fixed UTC offset.

    ``utc_offset_minutes`` follows the JavaScript convention: UTC+2 is -120.
    """

    calendar_date: date
    seconds_of_day: int
    utc_offset_minutes: int

    @classmethod
    def from_instant(cls, instant: datetime, utc_offset_minutes: int) -> "LocalInstant":
        local = as_utc(instant).replace(tzinfo=None) - timedelta(minutes=utc_offset_minutes)
        seconds = local.hour * 3600 + local.minute * 60 + local.second
        return cls(calendar_date=local.date(), seconds_of_day=seconds, utc_offset_minutes=utc_offset_minutes)

    @property
    def hour(self) -> int:
        return self.seconds_of_day // 3600

    @property
    def minute(self) -> int:
        return (self.seconds_of_day % 3600) // 60

    @property
    def wall_clock(self) -> datetime:
        return local_datetime(self.calendar_date, self.seconds_of_day)

    def hhmm(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
