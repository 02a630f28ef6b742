"""
convdate.core.dtfmt

Datetime format codec with nanosecond precision and leap-second display.

The dialect follows strftime, plus the optional-fraction directives of chrono:

  %Y           year (at least 4 digits on output, optional sign)
  %m %d        month, day (2 digits)
  %H %M %S     hour, minute, second (2 digits); %S accepts 60 and 61
  %j           day of year (3 digits)
  %f           fraction, 6 digits on output, 1-9 digits on input
  %.f          optional ".fraction"; output uses 3, 6 or 9 digits as needed
  %.3f %.6f %.9f
               optional ".fraction" on input, fixed digits on output
  %3f %6f %9f  fixed number of fraction digits, no dot
  %F %T        shorthands for %Y-%m-%d and %H:%M:%S
  %%           literal percent sign

datetime.strptime cannot represent second 60 and stops at microseconds, so
formats are compiled here into a regex and a list of renderers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple

from .time import Instant, from_jdn, to_jdn

DT_FMT = "%Y-%m-%dT%H:%M:%S%.3f"

_ALIASES = {"F": "%Y-%m-%d", "T": "%H:%M:%S"}

# directive -> (field name, regex, width used for output)
_INT_FIELDS: Dict[str, Tuple[str, str, int]] = {
    "Y": ("year", r"[+-]?\d{4,}", 4),
    "m": ("month", r"\d{2}", 2),
    "d": ("day", r"\d{2}", 2),
    "H": ("hour", r"\d{2}", 2),
    "M": ("minute", r"\d{2}", 2),
    "S": ("second", r"\d{2}", 2),
    "j": ("yday", r"\d{3}", 3),
}

Fields = Tuple[int, int, int, int, int, int, int]
Renderer = Callable[[Fields], str]


def _render_int(index: int, width: int) -> Renderer:
    def render(f: Fields) -> str:
        v = f[index]
        sign = "-" if v < 0 else ""
        return f"{sign}{abs(v):0{width}d}"
    return render


def _render_yday(f: Fields) -> str:
    year, month, day = f[0], f[1], f[2]
    return f"{to_jdn(year, month, day) - to_jdn(year, 1, 1) + 1:03d}"


def _render_fraction(digits: Optional[int], dot: bool) -> Renderer:
    def render(f: Fields) -> str:
        nanos = f[6]
        if digits is None:
            # %.f: shortest of 3/6/9 digits that is exact, nothing for zero
            if nanos == 0:
                return ""
            s = f"{nanos:09d}"
            for n in (3, 6, 9):
                if int(s[n:] or 0) == 0:
                    return "." + s[:n]
        s = f"{nanos:09d}"[:digits]
        return ("." if dot else "") + s
    return render


def _render_literal(text: str) -> Renderer:
    return lambda f: text


_FIELD_INDEX = {"year": 0, "month": 1, "day": 2, "hour": 3, "minute": 4, "second": 5}


@dataclass(frozen=True)
class DatetimeFormat:
    """A compiled format: parses text into Instant and renders Instant as text."""
    fmt: str
    regex: "re.Pattern[str]"
    renderers: Tuple[Renderer, ...]
    fields: Tuple[str, ...]

    def parse(self, text: str) -> Instant:
        """Parse ``text``; raises ValueError when it does not match the format."""
        m = self.regex.fullmatch(text)
        if m is None:
            raise ValueError(f"{text!r} does not match format {self.fmt!r}")
        g = m.groupdict()

        year = int(g["year"])
        if "yday" in self.fields:
            yday = int(g["yday"])
            jdn0 = to_jdn(year, 1, 1)
            if not 1 <= yday <= to_jdn(year + 1, 1, 1) - jdn0:
                raise ValueError(f"day of year out of range: {yday}")
            _, month, day = from_jdn(jdn0 + yday - 1)
        else:
            month, day = int(g["month"]), int(g["day"])

        frac = g.get("frac")
        nanos = int(frac.ljust(9, "0")) if frac else 0
        return Instant.from_fields(
            year,
            month,
            day,
            int(g.get("hour") or 0),
            int(g.get("minute") or 0),
            int(g.get("second") or 0),
            nanos,
        )

    def format(self, instant: Instant) -> str:
        f = instant.fields()
        return "".join(r(f) for r in self.renderers)


@lru_cache(maxsize=64)
def compile_format(fmt: str) -> DatetimeFormat:
    """Compile a format string. Raises ValueError for unsupported directives."""
    pattern: List[str] = []
    renderers: List[Renderer] = []
    fields: List[str] = []

    def add_field(name: str) -> None:
        if name in fields:
            raise ValueError(f"field {name!r} appears twice in format {fmt!r}")
        fields.append(name)

    expanded = fmt
    i = 0
    n = len(expanded)
    while i < n:
        c = expanded[i]
        if c != "%":
            pattern.append(re.escape(c))
            renderers.append(_render_literal(c))
            i += 1
            continue

        rest = expanded[i + 1:]
        m = re.match(r"(\.)?([369])?f", rest)
        if m:
            dot, digits = m.group(1), m.group(2)
            add_field("frac")
            if dot:
                pattern.append(r"(?:\.(?P<frac>\d{1,9}))?")
                renderers.append(_render_fraction(int(digits) if digits else None, True))
            elif digits:
                pattern.append(rf"(?P<frac>\d{{{digits}}})")
                renderers.append(_render_fraction(int(digits), False))
            else:
                pattern.append(r"(?P<frac>\d{1,9})")
                renderers.append(_render_fraction(6, False))
            i += 1 + m.end()
            continue

        if not rest:
            raise ValueError(f"format {fmt!r} ends with a bare '%'")
        d = rest[0]
        if d in _ALIASES:
            expanded = expanded[:i] + _ALIASES[d] + expanded[i + 2:]
            n = len(expanded)
            continue
        if d == "%":
            pattern.append("%")
            renderers.append(_render_literal("%"))
        elif d in _INT_FIELDS:
            name, rx, width = _INT_FIELDS[d]
            add_field(name)
            pattern.append(f"(?P<{name}>{rx})")
            if name == "yday":
                renderers.append(_render_yday)
            else:
                renderers.append(_render_int(_FIELD_INDEX[name], width))
        else:
            raise ValueError(f"unsupported directive %{d} in format {fmt!r}")
        i += 2

    if "year" not in fields or not ({"month", "day"} <= set(fields) or "yday" in fields):
        raise ValueError(f"format {fmt!r} does not specify a full date")

    return DatetimeFormat(
        fmt=fmt,
        regex=re.compile("".join(pattern)),
        renderers=tuple(renderers),
        fields=tuple(fields),
    )


def parse_datetime(text: str, fmt: str = DT_FMT) -> Instant:
    return compile_format(fmt).parse(text)


def format_datetime(instant: Instant, fmt: str = DT_FMT) -> str:
    return compile_format(fmt).format(instant)
