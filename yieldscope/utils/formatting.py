"""
Display formatting for yields (already in percent units) and spreads.
"""
from __future__ import annotations

import math
from typing import Optional


def _is_num(x: object) -> bool:
    return isinstance(x, (int, float)) and not (isinstance(x, float) and math.isnan(x))


def fmt_yield(x: Optional[float], decimals: int = 2) -> str:
    """4.251 -> '4.25%'; None/NaN -> 'n/a'."""
    return f"{float(x):.{decimals}f}%" if _is_num(x) else "n/a"


def fmt_bps(x: Optional[float]) -> str:
    """Percent-point difference as signed basis points: -0.35 -> '-35bp'."""
    return f"{float(x) * 100.0:+.0f}bp" if _is_num(x) else "n/a"
