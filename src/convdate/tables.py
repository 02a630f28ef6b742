"""
convdate.tables

Leap-second offset tables.

ForwardTable
  TAI - UTC step function over UTC, one row per change of the offset.
  Built from text lines ``<datetime> <offset>``, ascending.

ReverseTable
  UTC - TAI step function over TAI, derived once from a ForwardTable.
  Inserted leap seconds produce an extra transitional row whose
  correction_seconds re-encodes the result as 23:59:60.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Tuple, Union

from .core.dtfmt import DT_FMT
from .core.errors import DatetimeTooEarlyError, TableOrderError
from .core.time import Instant
from .core.types import ForwardRow, ReverseRow

logger = logging.getLogger(__name__)


def pick_dominant_row(table: Union["ForwardTable", "ReverseTable"], instant: Instant):
    """
    The last row whose effective instant is <= ``instant``.

    Floor lookup over the step function (inclusive lower bound). Raises
    DatetimeTooEarlyError when ``instant`` precedes the first row.
    """
    i = bisect_right(table.keys, instant)
    if i == 0:
        raise DatetimeTooEarlyError(str(instant))
    return table.rows[i - 1]


@dataclass(frozen=True)
class ForwardTable:
    rows: Tuple[ForwardRow, ...]
    keys: Tuple[Instant, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        rows = tuple(self.rows)
        _check_ascending(r.effective_utc for r in rows)
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "keys", tuple(r.effective_utc for r in rows))

    @classmethod
    def from_lines(cls, lines: Iterable[str], fmt: str = DT_FMT, sep: str = " ") -> "ForwardTable":
        """
        Parse every line; the first malformed line aborts the build.

        Blank lines and lines starting with '#' are skipped.
        """
        rows = []
        prev: Optional[Instant] = None
        for line in lines:
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            row = ForwardRow.from_line(line, sep, fmt)
            if prev is not None and not prev < row.effective_utc:
                raise TableOrderError(line.rstrip("\r\n"))
            prev = row.effective_utc
            rows.append(row)
        logger.debug("Parsed TAI-UTC table with %d rows", len(rows))
        return cls(tuple(rows))

    def pick_dominant_row(self, instant: Instant) -> ForwardRow:
        return pick_dominant_row(self, instant)

    def __iter__(self) -> Iterator[ForwardRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, i: int) -> ForwardRow:
        return self.rows[i]

    @property
    def range(self) -> Optional[Tuple[Instant, Instant]]:
        """(first, last) effective instant; None for an empty table."""
        if not self.keys:
            return None
        return (self.keys[0], self.keys[-1])


@dataclass(frozen=True)
class ReverseTable:
    rows: Tuple[ReverseRow, ...]
    keys: Tuple[Instant, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        rows = tuple(self.rows)
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "keys", tuple(r.effective_tai for r in rows))

    @classmethod
    def from_forward(cls, forward: ForwardTable) -> "ReverseTable":
        """
        Derive the TAI -> UTC table.

        For each forward row at UTC instant n with offset cur (previous offset prev):
          cur > prev: transitional row at n + prev, offset -cur, correction cur - prev
          always:     final row at n + cur, offset -cur, correction 0
        A decrease skips UTC seconds, so it needs no transitional row.
        """
        rows = []
        prev: Optional[int] = None
        for fr in forward:
            n = fr.effective_utc.normalized()
            cur = fr.cumulative_offset
            if prev is not None and cur > prev:
                delta = cur - prev
                if delta > 2:
                    logger.warning(
                        "Leap step of %d seconds at %s is beyond historical experience", delta, n
                    )
                rows.append(ReverseRow(n.shift(seconds=prev), -cur, delta))
            rows.append(ReverseRow(n.shift(seconds=cur), -cur, 0))
            prev = cur
        table = cls(tuple(rows))
        logger.debug(
            "Derived UTC-TAI table: %d rows, %d transitional",
            len(table),
            sum(1 for r in table if r.is_transitional),
        )
        return table

    def pick_dominant_row(self, instant: Instant) -> ReverseRow:
        return pick_dominant_row(self, instant)

    def __iter__(self) -> Iterator[ReverseRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, i: int) -> ReverseRow:
        return self.rows[i]


def _check_ascending(instants: Iterable[Instant]) -> None:
    prev: Optional[Instant] = None
    for x in instants:
        if prev is not None and not prev < x:
            raise TableOrderError(str(x))
        prev = x
