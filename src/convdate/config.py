"""
convdate.config

Run-time parameters of the converters.

Each value is taken from the command line, else from the environment
(DT_FMT, LEAPS_DT_FMT, LEAPS_TABLE), else from the default.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .core.dtfmt import DT_FMT

ENV_DT_FMT = "DT_FMT"
ENV_LEAPS_DT_FMT = "LEAPS_DT_FMT"
ENV_LEAPS_TABLE = "LEAPS_TABLE"


def _first(*values: Optional[str]) -> Optional[str]:
    for v in values:
        if v:
            return v
    return None


@dataclass(frozen=True)
class Settings:
    dt_fmt: str = DT_FMT
    leaps_dt_fmt: Optional[str] = None  # None: the loader's default for the chosen source
    leaps_path: Optional[Path] = None   # None: the bundled table
    io_pair: bool = False

    @classmethod
    def resolve(
        cls,
        *,
        dt_fmt: Optional[str] = None,
        leaps_dt_fmt: Optional[str] = None,
        leaps_path: Optional[str] = None,
        io_pair: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        env = environ if environ is not None else {}
        path = _first(leaps_path, env.get(ENV_LEAPS_TABLE))
        return cls(
            dt_fmt=_first(dt_fmt, env.get(ENV_DT_FMT)) or DT_FMT,
            leaps_dt_fmt=_first(leaps_dt_fmt, env.get(ENV_LEAPS_DT_FMT)),
            leaps_path=Path(path) if path else None,
            io_pair=io_pair,
        )
