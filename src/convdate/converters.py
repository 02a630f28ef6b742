"""
convdate.converters
-------------------
The fixed set of conversion directions, each bound to its table and format.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, Union

from . import scales
from .core.dtfmt import DT_FMT, compile_format
from .core.errors import ConvdateError
from .tables import ForwardTable, ReverseTable


class ConversionKind(str, Enum):
    UTC2TAI = "utc2tai"
    TAI2UTC = "tai2utc"
    TT2UTC = "tt2utc"
    UTC2TT = "utc2tt"
    TT2TAI = "tt2tai"
    TAI2TT = "tai2tt"
    UT2MJD = "ut2mjd"

    @property
    def needs_table(self) -> bool:
        return self not in (ConversionKind.TT2TAI, ConversionKind.TAI2TT, ConversionKind.UT2MJD)

    @property
    def needs_reverse(self) -> bool:
        return self in (ConversionKind.TAI2UTC, ConversionKind.TT2UTC)

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ConversionKind.UTC2TAI: "Converter from UTC to TAI",
    ConversionKind.TAI2UTC: "Converter from TAI to UTC",
    ConversionKind.TT2UTC: "Converter from TT to UTC",
    ConversionKind.UTC2TT: "Converter from UTC to TT",
    ConversionKind.TT2TAI: "Converter from TT to TAI",
    ConversionKind.TAI2TT: "Converter from TAI to TT",
    ConversionKind.UT2MJD: "Converter from UT to MJD",
}


@dataclass(frozen=True)
class Converter:
    kind: ConversionKind
    dt_fmt: str = DT_FMT
    forward: Optional[ForwardTable] = None
    reverse: Optional[ReverseTable] = None

    def __post_init__(self) -> None:
        compile_format(self.dt_fmt)  # fail early on a bad format
        if self.kind.needs_reverse and self.reverse is None:
            raise ValueError(f"{self.kind.value} needs a UTC-TAI (reverse) table")
        if self.kind.needs_table and not self.kind.needs_reverse and self.forward is None:
            raise ValueError(f"{self.kind.value} needs a TAI-UTC table")

    def convert(self, text: str) -> str:
        k = self.kind
        if k is ConversionKind.UTC2TAI:
            return scales.utc2tai(text, self.forward, self.dt_fmt)
        if k is ConversionKind.TAI2UTC:
            return scales.tai2utc(text, self.reverse, self.dt_fmt)
        if k is ConversionKind.TT2UTC:
            return scales.tt2utc(text, self.reverse, self.dt_fmt)
        if k is ConversionKind.UTC2TT:
            return scales.utc2tt(text, self.forward, self.dt_fmt)
        if k is ConversionKind.TT2TAI:
            return scales.tt2tai(text, self.dt_fmt)
        if k is ConversionKind.TAI2TT:
            return scales.tai2tt(text, self.dt_fmt)
        if k is ConversionKind.UT2MJD:
            return scales.ut2mjd_str(text, self.dt_fmt)
        raise RuntimeError("unreachable")

    def convert_many(
        self, texts: Iterable[str]
    ) -> Iterator[Tuple[str, Union[str, ConvdateError]]]:
        """Yield (input, output or error) per item; one failure never stops the batch."""
        for text in texts:
            try:
                yield text, self.convert(text)
            except ConvdateError as e:
                yield text, e


def make_converter(
    kind: Union[ConversionKind, str],
    table: Optional[ForwardTable] = None,
    *,
    dt_fmt: str = DT_FMT,
) -> Converter:
    """Bind ``kind`` to ``table``, deriving the reverse table only when the direction needs it."""
    kind = ConversionKind(kind)
    if not kind.needs_table:
        return Converter(kind, dt_fmt)
    if table is None:
        raise ValueError(f"{kind.value} needs a TAI-UTC table")
    if kind.needs_reverse:
        return Converter(kind, dt_fmt, reverse=ReverseTable.from_forward(table))
    return Converter(kind, dt_fmt, forward=table)
