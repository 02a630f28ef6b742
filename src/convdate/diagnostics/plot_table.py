#!/usr/bin/env python3
from __future__ import annotations

import argparse

from convdate.loader import load_table
from convdate.scales import ut2mjd_dt
from convdate.tables import ReverseTable


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "convdate[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "convdate[diagnostics]"') from e


def step_series(table, np):
    """(MJD of each UTC row, TAI-UTC) as float arrays, ready for a post-step plot."""
    x = np.array([ut2mjd_dt(r.effective_utc) for r in table], dtype=float)
    y = np.array([r.cumulative_offset for r in table], dtype=float)
    return x, y


def transitional_points(reverse: ReverseTable, np):
    """(MJD of TAI start, UTC-TAI) of every transitional reverse row."""
    rows = [r for r in reverse if r.is_transitional]
    x = np.array([ut2mjd_dt(r.effective_tai) for r in rows], dtype=float)
    y = np.array([-r.cumulative_offset for r in rows], dtype=float)
    return x, y


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot TAI-UTC (seconds) from a leaps table.")
    p.add_argument("--leaps-table", default=None, help="table path (default: bundled table)")
    p.add_argument("--leaps-dt-fmt", default=None, help="format of datetime in the table")
    p.add_argument("--out", default="tai_utc.png", help="output image filename")
    p.add_argument("--show-transitions", action="store_true", help="mark inserted leap seconds")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    table = load_table(args.leaps_table, fmt=args.leaps_dt_fmt)
    if len(table) == 0:
        raise SystemExit("leaps table is empty")

    x, y = step_series(table, np)

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.step(x, y, where="post", linewidth=2, label="TAI - UTC")

    if args.show_transitions:
        tx, ty = transitional_points(ReverseTable.from_forward(table), np)
        ax.scatter(tx, ty, s=14, color="tab:red", zorder=3, label="inserted leap second")

    ax.set_title("TAI - UTC (seconds)")
    ax.set_xlabel("MJD (UTC)")
    ax.set_ylabel("seconds")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=150)
    plt.close(fig)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
