from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from yieldscope.utils.dates import format_ymd, parse_ymd


class Tenor(str, Enum):
    """Published par-yield maturities, in curve order."""

    M1 = "1M"
    M2 = "2M"
    M3 = "3M"
    M6 = "6M"
    Y1 = "1Y"
    Y2 = "2Y"
    Y3 = "3Y"
    Y5 = "5Y"
    Y7 = "7Y"
    Y10 = "10Y"
    Y20 = "20Y"
    Y30 = "30Y"

    @property
    def label(self) -> str:
        return self.value

    @property
    def field(self) -> str:
        """Field name used by the FMP treasury payload (e.g. ``month1``, ``year10``)."""
        return TENOR_FIELDS[self]


TENOR_FIELDS: Dict[Tenor, str] = {
    Tenor.M1: "month1",
    Tenor.M2: "month2",
    Tenor.M3: "month3",
    Tenor.M6: "month6",
    Tenor.Y1: "year1",
    Tenor.Y2: "year2",
    Tenor.Y3: "year3",
    Tenor.Y5: "year5",
    Tenor.Y7: "year7",
    Tenor.Y10: "year10",
    Tenor.Y20: "year20",
    Tenor.Y30: "year30",
}

TENOR_ORDER: tuple[Tenor, ...] = tuple(Tenor)
SHORT_END: tuple[Tenor, ...] = (Tenor.M1, Tenor.M2, Tenor.M3, Tenor.M6)
LONG_END: tuple[Tenor, ...] = (Tenor.Y10, Tenor.Y20, Tenor.Y30)


class YieldRecord(BaseModel):
    """One calendar date's published par yields (percent). Absent tenors stay ``None``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: str

    month1: Optional[float] = None
    month2: Optional[float] = None
    month3: Optional[float] = None
    month6: Optional[float] = None
    year1: Optional[float] = None
    year2: Optional[float] = None
    year3: Optional[float] = None
    year5: Optional[float] = None
    year7: Optional[float] = None
    year10: Optional[float] = None
    year20: Optional[float] = None
    year30: Optional[float] = None

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str) -> str:
        v = v.strip()
        # Only the zero-padded yyyy-MM-dd form; strptime alone also takes "2024-9-16".
        if format_ymd(parse_ymd(v)) != v:
            raise ValueError(f"date must be yyyy-MM-dd, got {v!r}")
        return v

    def yield_for(self, tenor: Tenor) -> float | None:
        return getattr(self, tenor.field)

    def yields(self) -> Dict[Tenor, float | None]:
        return {t: self.yield_for(t) for t in TENOR_ORDER}


@dataclass(frozen=True)
class MaturityYieldPoint:
    maturity: str
    yield_pct: float

    def as_dict(self) -> dict[str, float | str]:
        return {"maturity": self.maturity, "yield": self.yield_pct}


class CurveShape(str, Enum):
    INVERTED = "inverted"
    NORMAL = "normal"
    FLAT = "flat"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class CurveClassification:
    shape: CurveShape
    label: str
    description: str = ""
    # NaN when the corresponding end of the curve has no data.
    short_avg: float = math.nan
    long_avg: float = math.nan
    short_count: int = 0
    long_count: int = 0
    tags: tuple[str, ...] = ()

    @property
    def is_conclusive(self) -> bool:
        return self.shape is not CurveShape.INSUFFICIENT_DATA

    @property
    def spread(self) -> float:
        """Long-end average minus short-end average (percent); NaN when inconclusive."""
        return self.long_avg - self.short_avg
