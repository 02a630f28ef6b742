from __future__ import annotations

import re
from dataclasses import dataclass

from .dtfmt import DT_FMT, compile_format
from .errors import TableDatetimeError, TableIntegerError, TableLineError
from .time import Instant

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ForwardRow:
    """TAI - UTC (seconds) in force from ``effective_utc`` onward."""
    effective_utc: Instant
    cumulative_offset: int

    @classmethod
    def from_line(cls, line: str, sep: str = " ", fmt: str = DT_FMT) -> "ForwardRow":
        """
        Parse ``<datetime><sep><integer>``.

        Raises TableLineError unless the line splits into exactly two fields,
        TableDatetimeError for the first field, TableIntegerError for the second.
        """
        codec = compile_format(fmt)
        line = line.rstrip("\r\n")
        parts = line.split(sep, 2)
        if len(parts) != 2:
            raise TableLineError(line)

        try:
            effective = codec.parse(parts[0])
        except ValueError:
            raise TableDatetimeError(parts[0]) from None

        if not _INTEGER_RE.fullmatch(parts[1]):
            raise TableIntegerError(line)
        offset = int(parts[1])
        if not _INT64_MIN <= offset <= _INT64_MAX:
            raise TableIntegerError(line)

        return cls(effective, offset)

    def __str__(self) -> str:
        return f"{self.effective_utc} {self.cumulative_offset}"


@dataclass(frozen=True)
class ReverseRow:
    """
    UTC - TAI (seconds) in force from ``effective_tai`` onward.

    correction_seconds > 0 marks a transitional row: TAI instants inside an
    inserted leap second, rendered back as 23:59:60 (and :61 for a double step).
    """
    effective_tai: Instant
    cumulative_offset: int
    correction_seconds: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.correction_seconds < 60:
            raise ValueError(f"correction_seconds out of range: {self.correction_seconds}")

    @property
    def is_transitional(self) -> bool:
        return self.correction_seconds > 0
