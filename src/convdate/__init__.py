"""convdate public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .core.dtfmt import DT_FMT, format_datetime, parse_datetime
from .core.errors import (
    ConvdateError,
    DatetimeFormatError,
    DatetimeParseError,
    DatetimeTooEarlyError,
    TableDatetimeError,
    TableError,
    TableIntegerError,
    TableLineError,
    TableLoadError,
    TableOrderError,
)
from .core.time import Instant
from .core.types import ForwardRow, ReverseRow
from .converters import ConversionKind, Converter, make_converter
from .loader import load_table
from .scales import (
    tai2tt,
    tai2tt_dt,
    tai2utc,
    tai2utc_dt,
    tt2tai,
    tt2tai_dt,
    tt2utc,
    tt2utc_dt,
    ut2mjd,
    ut2mjd_dt,
    ut2mjd_str,
    utc2tai,
    utc2tai_dt,
    utc2tt,
    utc2tt_dt,
)
from .tables import ForwardTable, ReverseTable, pick_dominant_row

__all__ = [
    "DT_FMT",
    "parse_datetime",
    "format_datetime",
    "Instant",
    "ForwardRow",
    "ReverseRow",
    "ForwardTable",
    "ReverseTable",
    "pick_dominant_row",
    "load_table",
    "utc2tai",
    "utc2tai_dt",
    "tai2utc",
    "tai2utc_dt",
    "tt2tai",
    "tt2tai_dt",
    "tai2tt",
    "tai2tt_dt",
    "tt2utc",
    "tt2utc_dt",
    "utc2tt",
    "utc2tt_dt",
    "ut2mjd",
    "ut2mjd_dt",
    "ut2mjd_str",
    "ConversionKind",
    "Converter",
    "make_converter",
    "ConvdateError",
    "TableError",
    "TableLineError",
    "TableDatetimeError",
    "TableIntegerError",
    "TableOrderError",
    "TableLoadError",
    "DatetimeFormatError",
    "DatetimeParseError",
    "DatetimeTooEarlyError",
]
