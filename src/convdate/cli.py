from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import os
import sys
from typing import IO, Iterable, Iterator, List, Mapping, Optional

from .config import Settings
from .converters import ConversionKind, make_converter
from .core.errors import ConvdateError
from .loader import load_table

logger = logging.getLogger(__name__)

EXIT_CODE_OK = 0
EXIT_CODE_NG = 1
EXIT_CODE_SOME_DT_NOT_CONVERTED = 2


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _print_err(stderr: IO[str], prog: str, err: object) -> None:
    print(f"{prog}: {err}", file=stderr)


def _setup_logging(verbose: bool, stream: IO[str]) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=stream,
    )


def _stdin_lines(stdin: IO[str], read_errors: List[Exception]) -> Iterator[str]:
    """Lines of stdin without line ends; a read failure is recorded and ends the input."""
    while True:
        try:
            line = stdin.readline()
        except (UnicodeDecodeError, OSError) as e:
            read_errors.append(e)
            return
        if not line:
            return
        yield line.rstrip("\r\n")


def _conversion_parser(kind: ConversionKind, prog: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog, description=kind.description)
    p.add_argument("--dt-fmt", help="format of <datetime> (env: DT_FMT)")
    if kind.needs_table:
        p.add_argument("--leaps-dt-fmt", help="format of datetime in leaps table file (env: LEAPS_DT_FMT)")
        p.add_argument(
            "--leaps-table",
            help="Filepath of leaps table file. If it is not specified, environment value "
                 "'LEAPS_TABLE' is used. If both of them are not specified, the bundled table is used.",
        )
    p.add_argument(
        "-H", "--io-pair",
        action="store_true",
        help="If it is specified, input datetime is also output to stdout.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    p.add_argument("datetime", nargs="*", help="datetime to convert; read from stdin when omitted")
    return p


def run_conversion(
    kind: ConversionKind,
    argv: List[str],
    *,
    prog: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """
    Convert every datetime in ``argv`` (or every stdin line) and print the results.

    Returns EXIT_CODE_NG when the table or format is unusable,
    EXIT_CODE_SOME_DT_NOT_CONVERTED when any datetime failed, else EXIT_CODE_OK.
    """
    environ = os.environ if environ is None else environ
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr
    prog = prog or kind.value

    args = _conversion_parser(kind, prog).parse_args(argv)
    _setup_logging(args.verbose, stderr)

    settings = Settings.resolve(
        dt_fmt=args.dt_fmt,
        leaps_dt_fmt=getattr(args, "leaps_dt_fmt", None),
        leaps_path=getattr(args, "leaps_table", None),
        io_pair=args.io_pair,
        environ=environ,
    )

    try:
        table = None
        if kind.needs_table:
            table = load_table(settings.leaps_path, fmt=settings.leaps_dt_fmt)
        converter = make_converter(kind, table, dt_fmt=settings.dt_fmt)
    except (ConvdateError, ValueError) as e:
        _print_err(stderr, prog, e)
        return EXIT_CODE_NG

    read_errors: List[Exception] = []
    texts: Iterable[str]
    if args.datetime:
        texts = args.datetime
    else:
        texts = _stdin_lines(stdin, read_errors)

    failed = 0
    for text, out in converter.convert_many(texts):
        if isinstance(out, ConvdateError):
            failed += 1
            _print_err(stderr, prog, out)
        elif settings.io_pair:
            print(f"{text} {out}", file=stdout)
        else:
            print(out, file=stdout)

    for e in read_errors:
        failed += 1
        _print_err(stderr, prog, e)

    if failed:
        logger.debug("%d datetime(s) not converted", failed)
        return EXIT_CODE_SOME_DT_NOT_CONVERTED
    return EXIT_CODE_OK


def main(
    argv: list[str] | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="convdate", description="Leap-second aware UTC/TAI/TT/MJD converters.")
    sub = p.add_subparsers(dest="cmd", required=True)
    for kind in ConversionKind:
        sub.add_parser(kind.value, help=kind.description, add_help=False)
    sub.add_parser("plot-table", help="Plot TAI-UTC from a leaps table (diagnostics)", add_help=False)

    args, rest = p.parse_known_args(argv)

    if args.cmd == "plot-table":
        return _run_module_main("convdate.diagnostics.plot_table", rest)

    return run_conversion(
        ConversionKind(args.cmd),
        rest,
        prog=f"convdate {args.cmd}",
        environ=environ,
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
    )


def utc2tai_main(argv: list[str] | None = None) -> int:
    return run_conversion(ConversionKind.UTC2TAI, sys.argv[1:] if argv is None else argv)


def tai2utc_main(argv: list[str] | None = None) -> int:
    return run_conversion(ConversionKind.TAI2UTC, sys.argv[1:] if argv is None else argv)


def tt2utc_main(argv: list[str] | None = None) -> int:
    return run_conversion(ConversionKind.TT2UTC, sys.argv[1:] if argv is None else argv)


def utc2tt_main(argv: list[str] | None = None) -> int:
    return run_conversion(ConversionKind.UTC2TT, sys.argv[1:] if argv is None else argv)


def ut2mjd_main(argv: list[str] | None = None) -> int:
    return run_conversion(ConversionKind.UT2MJD, sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    raise SystemExit(main())
