"""
convdate.scales

Conversions between UTC, TAI, TT and MJD.

Each direction comes in two layers:
  xxx2yyy_dt(instant, table) -> Instant   works on parsed instants
  xxx2yyy(text, table, fmt) -> str        parses, converts and formats

Text-level functions raise DatetimeParseError / DatetimeTooEarlyError citing
the text the caller passed in, and DatetimeFormatError citing an unusable fmt.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .core.dtfmt import DT_FMT, DatetimeFormat, compile_format
from .core.errors import DatetimeFormatError, DatetimeParseError, DatetimeTooEarlyError
from .core.time import MJD_EPOCH_JDN, NANOS_PER_DAY, Instant
from .tables import ForwardTable, ReverseTable

# TT - TAI, fixed by definition
D_TT_TAI_MS = 32184
D_TT_TAI_NANOS = D_TT_TAI_MS * 1_000_000


def _codec(fmt: str) -> DatetimeFormat:
    try:
        return compile_format(fmt)
    except ValueError:
        raise DatetimeFormatError(fmt) from None


def _parse(text: str, codec: DatetimeFormat) -> Instant:
    try:
        return codec.parse(text)
    except ValueError:
        raise DatetimeParseError(text) from None


@contextmanager
def _cite(text: str) -> Iterator[None]:
    """Re-raise a too-early error from an inner step so it names ``text``."""
    try:
        yield
    except DatetimeTooEarlyError as e:
        raise DatetimeTooEarlyError(text) from e


# ============================================================
# UTC <-> TAI
# ============================================================

def utc2tai_dt(instant: Instant, table: ForwardTable) -> Instant:
    """
    UTC -> TAI.

    The row is picked with the leap-encoded instant, so 23:59:60 still uses the
    offset in force before midnight; the offset is added to the continuous value.
    """
    row = table.pick_dominant_row(instant)
    return instant.shift(seconds=row.cumulative_offset)


def utc2tai(text: str, table: ForwardTable, fmt: str = DT_FMT) -> str:
    """
    >>> table = ForwardTable.from_lines(["2017-01-01T00:00:00 37"], "%Y-%m-%dT%H:%M:%S")
    >>> utc2tai("2017-01-01T12:00:00.000", table)
    '2017-01-01T12:00:37.000'
    """
    codec = _codec(fmt)
    utc = _parse(text, codec)
    with _cite(text):
        tai = utc2tai_dt(utc, table)
    return codec.format(tai)


def tai2utc_dt(instant: Instant, table: ReverseTable) -> Instant:
    """
    TAI -> UTC.

    Inside an inserted leap second the transitional row's correction is
    re-applied as sub-second overflow, which formats as 23:59:60.
    """
    row = table.pick_dominant_row(instant)
    return instant.shift(seconds=row.cumulative_offset).with_leap(row.correction_seconds)


def tai2utc(text: str, table: ReverseTable, fmt: str = DT_FMT) -> str:
    codec = _codec(fmt)
    tai = _parse(text, codec)
    with _cite(text):
        utc = tai2utc_dt(tai, table)
    return codec.format(utc)


# ============================================================
# TT <-> TAI (fixed offset)
# ============================================================

def tt2tai_dt(instant: Instant) -> Instant:
    return instant.shift(nanos=-D_TT_TAI_NANOS)


def tai2tt_dt(instant: Instant) -> Instant:
    return instant.shift(nanos=D_TT_TAI_NANOS)


def tt2tai(text: str, fmt: str = DT_FMT) -> str:
    codec = _codec(fmt)
    return codec.format(tt2tai_dt(_parse(text, codec)))


def tai2tt(text: str, fmt: str = DT_FMT) -> str:
    codec = _codec(fmt)
    return codec.format(tai2tt_dt(_parse(text, codec)))


# ============================================================
# TT <-> UTC (composed)
# ============================================================

def tt2utc_dt(instant: Instant, table: ReverseTable) -> Instant:
    with _cite(str(instant)):
        return tai2utc_dt(tt2tai_dt(instant), table)


def utc2tt_dt(instant: Instant, table: ForwardTable) -> Instant:
    with _cite(str(instant)):
        return tai2tt_dt(utc2tai_dt(instant, table))


def tt2utc(text: str, table: ReverseTable, fmt: str = DT_FMT) -> str:
    """
    >>> table = ReverseTable.from_forward(
    ...     ForwardTable.from_lines(["2017-01-01T00:00:00 37"], "%Y-%m-%dT%H:%M:%S"))
    >>> tt2utc("2017-01-01T12:01:09.000", table)
    '2017-01-01T11:59:59.816'
    """
    codec = _codec(fmt)
    tt = _parse(text, codec)
    with _cite(text):
        utc = tt2utc_dt(tt, table)
    return codec.format(utc)


def utc2tt(text: str, table: ForwardTable, fmt: str = DT_FMT) -> str:
    codec = _codec(fmt)
    utc = _parse(text, codec)
    with _cite(text):
        tt = utc2tt_dt(utc, table)
    return codec.format(tt)


# ============================================================
# UT -> MJD (not leap-aware: every day is 86400 s)
# ============================================================

def ut2mjd_dt(instant: Instant) -> float:
    jdn, nanos_of_day = instant.day_number()
    return (jdn - MJD_EPOCH_JDN) + nanos_of_day / NANOS_PER_DAY


def ut2mjd(text: str, fmt: str = DT_FMT) -> float:
    """
    >>> ut2mjd("2021-12-26T12:00:00")
    59574.5
    """
    return ut2mjd_dt(_parse(text, _codec(fmt)))


def ut2mjd_str(text: str, fmt: str = DT_FMT) -> str:
    return repr(ut2mjd(text, fmt))
