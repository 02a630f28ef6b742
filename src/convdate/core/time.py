from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

NANOS_PER_SECOND = 1_000_000_000
SECONDS_PER_DAY = 86400
NANOS_PER_DAY = SECONDS_PER_DAY * NANOS_PER_SECOND

UNIX_EPOCH_JDN = 2440588  # 1970-01-01
MJD_EPOCH_JDN = 2400001   # MJD = JDN - 2400001 at 00:00


def to_jdn(year: int, month: int, day: int) -> int:
    """Convert a proleptic Gregorian date to Julian Day Number (JDN)."""
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian), as (year, month, day)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31


@dataclass(frozen=True, order=True)
class Instant:
    """
    A point on a uniform time line: seconds since 1970-01-01T00:00:00 plus nanoseconds.

    Every day has exactly 86400 seconds here; the scale (UTC, TAI, TT) is
    carried by context, not by the value.

    Leap encoding:
      An inserted UTC second is written as 23:59:60. It is held with ``seconds``
      pinned at the nominal :59 second and ``nanos`` >= 1e9. Ordering stays
      lexicographic on (seconds, nanos), so 23:59:60.5 sorts after 23:59:59.999
      and before the next 00:00:00.
    """
    seconds: int
    nanos: int = 0

    @classmethod
    def from_fields(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanos: int = 0,
    ) -> "Instant":
        """
        Build an instant from calendar fields.

        second may be 60 or 61 to denote inserted leap seconds; the surplus is
        moved into nanos on top of the :59 second.
        """
        if not 1 <= month <= 12:
            raise ValueError(f"month out of range: {month}")
        if not 1 <= day <= days_in_month(year, month):
            raise ValueError(f"day out of range: {year:04d}-{month:02d}-{day:02d}")
        if not (0 <= hour < 24 and 0 <= minute < 60 and 0 <= second <= 61):
            raise ValueError(f"time out of range: {hour:02d}:{minute:02d}:{second:02d}")
        if not 0 <= nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanoseconds out of range: {nanos}")

        overflow = max(0, second - 59)
        second -= overflow
        days = to_jdn(year, month, day) - UNIX_EPOCH_JDN
        seconds = days * SECONDS_PER_DAY + hour * 3600 + minute * 60 + second
        return cls(seconds, nanos + overflow * NANOS_PER_SECOND)

    @property
    def is_leap(self) -> bool:
        return self.nanos >= NANOS_PER_SECOND

    def fields(self) -> Tuple[int, int, int, int, int, int, int]:
        """
        Calendar fields (year, month, day, hour, minute, second, nanos).

        A leap-encoded instant yields second >= 60 with nanos reduced below 1e9.
        """
        days, rem = divmod(self.seconds, SECONDS_PER_DAY)
        year, month, day = from_jdn(UNIX_EPOCH_JDN + days)
        hour, rem = divmod(rem, 3600)
        minute, second = divmod(rem, 60)
        extra, nanos = divmod(self.nanos, NANOS_PER_SECOND)
        return year, month, day, hour, minute, second + extra, nanos

    def normalized(self) -> "Instant":
        """Continuous elapsed time: the leap overflow is carried into seconds."""
        carry, nanos = divmod(self.nanos, NANOS_PER_SECOND)
        if carry == 0:
            return self
        return Instant(self.seconds + carry, nanos)

    def shift(self, seconds: int = 0, nanos: int = 0) -> "Instant":
        """Add a duration to the continuous value of this instant."""
        base = self.normalized()
        carry, nanos = divmod(base.nanos + nanos, NANOS_PER_SECOND)
        return Instant(base.seconds + seconds + carry, nanos)

    def with_leap(self, correction: int) -> "Instant":
        """Re-encode ``correction`` seconds as sub-second overflow (23:59:60 display)."""
        if correction == 0:
            return self
        return Instant(self.seconds, self.nanos + correction * NANOS_PER_SECOND)

    def day_number(self) -> Tuple[int, int]:
        """(JDN, nanoseconds since midnight) of the continuous value."""
        n = self.normalized()
        days, rem = divmod(n.seconds, SECONDS_PER_DAY)
        return UNIX_EPOCH_JDN + days, rem * NANOS_PER_SECOND + n.nanos

    def __str__(self) -> str:
        year, month, day, hour, minute, second, nanos = self.fields()
        out = f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}"
        if nanos:
            out += "." + f"{nanos:09d}".rstrip("0")
        return out
