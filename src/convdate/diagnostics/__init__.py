"""Diagnostics package.

Optional tools; they need the diagnostics extras (numpy, matplotlib).
"""

__all__ = ["plot_table"]
