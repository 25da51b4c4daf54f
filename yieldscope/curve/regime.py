from __future__ import annotations

import math

from yieldscope.curve.models import (
    LONG_END,
    SHORT_END,
    CurveClassification,
    CurveShape,
    Tenor,
    YieldRecord,
)

# ── Display text per shape ────────────────────────────────────────────────
LABELS: dict[CurveShape, str] = {
    CurveShape.INVERTED: "Inverted Yield Curve",
    CurveShape.NORMAL: "Normal Yield Curve",
    CurveShape.FLAT: "Flat Yield Curve",
    CurveShape.INSUFFICIENT_DATA: "Insufficient data",
}

DESCRIPTIONS: dict[CurveShape, str] = {
    CurveShape.INVERTED: "Investors see more risks now than in the longer term",
    CurveShape.NORMAL: "Investors have higher confidence now than in the longer term",
    CurveShape.FLAT: "Investor uncertainty is high",
    CurveShape.INSUFFICIENT_DATA: "Insufficient data to determine yield curve type.",
}


def _present(record: YieldRecord, tenors: tuple[Tenor, ...]) -> list[float]:
    return [float(v) for v in (record.yield_for(t) for t in tenors) if v is not None]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def curve_message(c: CurveClassification) -> str:
    """One-line text shown under the single-date chart."""
    if c.shape is CurveShape.INSUFFICIENT_DATA:
        return c.description
    return f"{c.label}. {c.description}"


def classify_curve(record: YieldRecord, *, tolerance: float = 0.0) -> CurveClassification:
    """
    Classify the shape of one date's curve from its short and long ends.

    Short end = 1M/2M/3M/6M, long end = 10Y/20Y/30Y. Each average is taken over
    the tenors actually present (a missing 2M divides by 3, not 4). With no data
    at either end the result is INSUFFICIENT_DATA and both averages are NaN.

    ``tolerance`` defaults to 0.0, i.e. "Flat" only when the two averages are
    bit-for-bit equal. Independently summed means rarely tie exactly, so callers
    wanting a usable Flat band pass a small positive tolerance (e.g. 0.05).
    """
    short = _present(record, SHORT_END)
    long_ = _present(record, LONG_END)

    if not short or not long_:
        shape = CurveShape.INSUFFICIENT_DATA
        return CurveClassification(
            shape=shape,
            label=LABELS[shape],
            description=DESCRIPTIONS[shape],
            short_avg=math.nan,
            long_avg=math.nan,
            short_count=len(short),
            long_count=len(long_),
            tags=("curve", shape.value),
        )

    short_avg = _mean(short)
    long_avg = _mean(long_)

    if tolerance > 0 and abs(short_avg - long_avg) <= tolerance:
        shape = CurveShape.FLAT
    elif short_avg > long_avg:
        shape = CurveShape.INVERTED
    elif short_avg < long_avg:
        shape = CurveShape.NORMAL
    else:
        shape = CurveShape.FLAT

    return CurveClassification(
        shape=shape,
        label=LABELS[shape],
        description=DESCRIPTIONS[shape],
        short_avg=short_avg,
        long_avg=long_avg,
        short_count=len(short),
        long_count=len(long_),
        tags=("curve", shape.value),
    )
