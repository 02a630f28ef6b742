"""
convdate.loader

Reads the TAI-UTC table source.

Search order:
  1) an explicit path (command line or LEAPS_TABLE, resolved by convdate.config)
  2) packaged data (convdate/data/leaps.txt)
"""

from __future__ import annotations

import importlib.resources
import logging
from pathlib import Path
from typing import List, Optional, Union

from .core.dtfmt import DT_FMT
from .core.errors import TableLoadError
from .tables import ForwardTable

logger = logging.getLogger(__name__)

BUNDLED_TABLE = "leaps.txt"
BUNDLED_FMT = "%Y-%m-%dT%H:%M:%S"


def read_table_lines(path: Optional[Union[str, Path]] = None) -> List[str]:
    if path is not None:
        path = Path(path).expanduser()
        logger.debug("Reading TAI-UTC table from %s", path)
        try:
            with path.open("r", encoding="utf-8") as f:
                return f.read().splitlines()
        except OSError as e:
            raise TableLoadError(str(path)) from e

    res = importlib.resources.files("convdate").joinpath("data").joinpath(BUNDLED_TABLE)
    logger.debug("Reading bundled TAI-UTC table %s", BUNDLED_TABLE)
    try:
        return res.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise TableLoadError(f"<bundled {BUNDLED_TABLE}>") from e


def load_table(
    path: Optional[Union[str, Path]] = None,
    *,
    fmt: Optional[str] = None,
    sep: str = " ",
) -> ForwardTable:
    """
    Load and parse a TAI-UTC table.

    fmt defaults to DT_FMT for a file given by path; the bundled table
    always uses its own format. Blank lines and lines starting with '#'
    are skipped.

    Raises TableLoadError if the file cannot be read; parse errors
    (TableLineError, TableDatetimeError, ...) propagate unchanged.
    """
    if path is None:
        fmt, sep = BUNDLED_FMT, " "
    elif fmt is None:
        fmt = DT_FMT
    return ForwardTable.from_lines(read_table_lines(path), fmt=fmt, sep=sep)
