from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from yieldscope.curve.models import TENOR_ORDER, MaturityYieldPoint, YieldRecord

# Y-axis ceiling when there is nothing to plot.
DEFAULT_MAX_YIELD = 5.0
MAX_YIELD_HEADROOM = 0.5


def normalize(record: YieldRecord) -> list[MaturityYieldPoint]:
    """
    Flatten a record into chartable (maturity, yield) points.

    Points always follow the fixed tenor order (1M ... 30Y); absent tenors
    contribute nothing, so a record with no yields gives an empty list.
    """
    points: list[MaturityYieldPoint] = []
    for tenor, value in record.yields().items():
        if value is None:
            continue
        points.append(MaturityYieldPoint(maturity=tenor.label, yield_pct=float(value)))
    return points


def max_yield(
    record: YieldRecord | None,
    *,
    default: float = DEFAULT_MAX_YIELD,
    headroom: float = MAX_YIELD_HEADROOM,
) -> float:
    """Chart y-axis ceiling: highest present yield plus headroom."""
    if record is None:
        return default
    values = [p.yield_pct for p in normalize(record)]
    return (max(values) if values else default) + headroom


def combine(records: Sequence[YieldRecord]) -> list[tuple[str, MaturityYieldPoint]]:
    """Tag each record's points with its date, records kept in the order given."""
    out: list[tuple[str, MaturityYieldPoint]] = []
    for rec in records:
        out.extend((rec.date, p) for p in normalize(rec))
    return out


def records_to_frame(records: Iterable[YieldRecord]) -> pd.DataFrame:
    """
    Wide table of yields: index = tenor label (curve order), one column per record date.

    Absent tenors are NaN. Duplicate dates keep the first occurrence.
    """
    cols: dict[str, list[float]] = {}
    for rec in records:
        if rec.date in cols:
            continue
        cols[rec.date] = [float(v) if v is not None else float("nan") for v in rec.yields().values()]
    df = pd.DataFrame(cols, index=[t.label for t in TENOR_ORDER], dtype=float)
    df.index.name = "maturity"
    return df
