from __future__ import annotations

import math

import pytest

from yieldscope.curve.models import TENOR_ORDER, Tenor, YieldRecord
from yieldscope.curve.normalize import combine, max_yield, normalize, records_to_frame


def test_normalize_single_tenor():
    pts = normalize(YieldRecord(date="2024-09-16", year5=3.2))
    assert len(pts) == 1
    assert pts[0].maturity == "5Y"
    assert pts[0].yield_pct == 3.2


def test_normalize_empty_record_gives_empty_list():
    assert normalize(YieldRecord(date="2024-09-16")) == []


def test_normalize_full_record_in_curve_order(full_record):
    pts = normalize(full_record)
    assert [p.maturity for p in pts] == [t.label for t in TENOR_ORDER]
    assert pts[0].yield_pct == 5.11
    assert pts[-1].yield_pct == 3.93


@pytest.mark.parametrize(
    "present",
    [
        {"year30": 4.1, "month1": 5.2, "year2": 3.9},
        {"month6": 4.4},
        {"year20": 4.0, "year10": 3.7, "month3": 4.9, "year1": 4.2},
    ],
)
def test_normalize_skips_absent_and_keeps_order(present):
    pts = normalize(YieldRecord(date="2024-01-02", **present))
    labels = [p.maturity for p in pts]
    assert len(pts) == len(present)
    assert labels == [t.label for t in TENOR_ORDER if t.field in present]
    assert len(set(labels)) == len(labels)


def test_zero_yield_is_present_not_absent():
    pts = normalize(YieldRecord(date="2021-01-04", month1=0.0, year10=0.93))
    assert [p.maturity for p in pts] == ["1M", "10Y"]
    assert pts[0].yield_pct == 0.0


def test_point_as_dict():
    (p,) = normalize(YieldRecord(date="2024-09-16", year7=3.54))
    assert p.as_dict() == {"maturity": "7Y", "yield": 3.54}


def test_max_yield_defaults():
    assert max_yield(None) == 5.0
    assert max_yield(YieldRecord(date="2024-09-16")) == 5.5
    assert max_yield(YieldRecord(date="2024-09-16", month1=5.25, year30=4.0)) == pytest.approx(5.75)


def test_combine_tags_points_with_dates():
    a = YieldRecord(date="2024-09-16", month1=5.1, year10=3.6)
    b = YieldRecord(date="2024-09-13", year10=3.7)
    out = combine([a, b])
    assert [(d, p.maturity) for d, p in out] == [
        ("2024-09-16", "1M"),
        ("2024-09-16", "10Y"),
        ("2024-09-13", "10Y"),
    ]


def test_records_to_frame(full_record):
    sparse = YieldRecord(date="2024-09-13", year10=3.66)
    df = records_to_frame([full_record, sparse])
    assert list(df.columns) == ["2024-09-16", "2024-09-13"]
    assert list(df.index) == [t.label for t in TENOR_ORDER]
    assert df.loc["10Y", "2024-09-13"] == 3.66
    assert math.isnan(df.loc["1M", "2024-09-13"])


def test_record_accessors(full_record):
    assert full_record.yield_for(Tenor.Y10) == 3.62
    assert list(full_record.yields()) == list(TENOR_ORDER)
    assert full_record.yields()[Tenor.Y30] == 3.93
    assert YieldRecord(date="2024-09-16").yields()[Tenor.M1] is None
