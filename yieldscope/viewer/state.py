"""
View state for the yield-curve screens.

Every change goes through ``reduce(state, message)``. Each fetch cycle gets a
new generation number; results tagged with an older generation are dropped, so
a slow response from a previous request can never overwrite a newer view.
"""
from __future__ import annotations

import functools
import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence, Union

from yieldscope.config import Settings, load_settings
from yieldscope.curve.models import CurveClassification, YieldRecord
from yieldscope.curve.regime import classify_curve
from yieldscope.data.treasury import TreasuryError, fetch_treasury_day, fetch_treasury_rates
from yieldscope.utils.dates import format_ymd

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    SINGLE = "single"
    COMPARE = "compare"
    RANGE = "range"


@dataclass(frozen=True)
class ViewState:
    generation: int = 0
    mode: ViewMode = ViewMode.SINGLE
    slots: tuple[str, ...] = ()
    is_loading: bool = False
    error_message: str = ""
    received: tuple[tuple[int, tuple[YieldRecord, ...]], ...] = ()
    failed: tuple[int, ...] = ()
    classification: CurveClassification | None = None

    @property
    def pending(self) -> frozenset[int]:
        done = {slot for slot, _ in self.received} | set(self.failed)
        return frozenset(i for i in range(len(self.slots)) if i not in done)

    @property
    def records(self) -> tuple[YieldRecord, ...]:
        """Fetched records in slot order (not arrival order)."""
        by_slot = dict(self.received)
        out: list[YieldRecord] = []
        for i in range(len(self.slots)):
            out.extend(by_slot.get(i, ()))
        return tuple(out)

    @property
    def empty_slots(self) -> tuple[str, ...]:
        """Labels of slots that reported successfully but with no rows (weekend, holiday)."""
        return tuple(self.slots[slot] for slot, recs in sorted(self.received, key=lambda r: r[0]) if not recs)

    @property
    def latest(self) -> YieldRecord | None:
        recs = self.records
        return recs[0] if recs else None


@dataclass(frozen=True)
class FetchStarted:
    generation: int
    mode: ViewMode
    slots: tuple[str, ...]


@dataclass(frozen=True)
class FetchSucceeded:
    generation: int
    slot: int
    records: tuple[YieldRecord, ...]


@dataclass(frozen=True)
class FetchFailed:
    generation: int
    slot: int
    message: str


Message = Union[FetchStarted, FetchSucceeded, FetchFailed]


def _settle(state: ViewState, tolerance: float) -> ViewState:
    if state.pending:
        return state
    classification = None
    if state.mode is not ViewMode.COMPARE and state.latest is not None:
        classification = classify_curve(state.latest, tolerance=tolerance)
    return replace(state, is_loading=False, classification=classification)


def reduce(state: ViewState, message: Message, *, tolerance: float = 0.0) -> ViewState:
    if isinstance(message, FetchStarted):
        if message.generation <= state.generation:
            return state
        return ViewState(
            generation=message.generation,
            mode=message.mode,
            slots=tuple(message.slots),
            is_loading=bool(message.slots),
        )

    if message.generation != state.generation:
        logger.debug("Dropping stale %s (gen %d, current %d)", type(message).__name__, message.generation, state.generation)
        return state
    if message.slot not in state.pending:
        return state

    if isinstance(message, FetchSucceeded):
        state = replace(state, received=state.received + ((message.slot, tuple(message.records)),))
    elif isinstance(message, FetchFailed):
        state = replace(state, failed=state.failed + (message.slot,), error_message=message.message)
    else:
        raise TypeError(f"Unknown message: {message!r}")

    return _settle(state, tolerance)


Fetcher = Callable[[date, date], Sequence[YieldRecord]]
DayFetcher = Callable[[date], Optional[YieldRecord]]


class CurveSession:
    """
    Owns one ViewState and runs fetch cycles against it.

    Results from worker threads are applied under a lock through ``reduce``;
    that is the only place the state changes.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        fetcher: Fetcher | None = None,
        day_fetcher: DayFetcher | None = None,
        tolerance: float | None = None,
    ):
        self.settings = settings if settings is not None else load_settings()
        self._fetch: Fetcher = fetcher or (lambda start, end: fetch_treasury_rates(self.settings, start, end))
        self._fetch_day: DayFetcher = day_fetcher or (lambda day: fetch_treasury_day(self.settings, day))
        self.tolerance = self.settings.flat_tolerance if tolerance is None else float(tolerance)
        self._lock = threading.Lock()
        self._generations = itertools.count(1)
        self._state = ViewState()

    @property
    def state(self) -> ViewState:
        with self._lock:
            return self._state

    def dispatch(self, message: Message) -> ViewState:
        with self._lock:
            self._state = reduce(self._state, message, tolerance=self.tolerance)
            return self._state

    def begin(self, mode: ViewMode, slots: Sequence[str]) -> int:
        with self._lock:
            generation = next(self._generations)
        self.dispatch(FetchStarted(generation=generation, mode=mode, slots=tuple(slots)))
        return generation

    def run_slot(self, generation: int, slot: int, load: Callable[[], Iterable[YieldRecord]]) -> None:
        """
        Run one fetch and report it. Provider failures become the view's error;
        anything else is reported too (so the view stops loading) and then re-raised.
        """
        try:
            records = tuple(load())
        except TreasuryError as e:
            logger.debug("Fetch for slot %d failed: %s", slot, e)
            self.dispatch(FetchFailed(generation=generation, slot=slot, message=str(e)))
            return
        except Exception as e:
            self.dispatch(FetchFailed(generation=generation, slot=slot, message=f"Unexpected error: {e}"))
            raise
        self.dispatch(FetchSucceeded(generation=generation, slot=slot, records=records))

    def _day_records(self, day: date) -> tuple[YieldRecord, ...]:
        rec = self._fetch_day(day)
        return (rec,) if rec is not None else ()

    def load_single(self, day: date) -> ViewState:
        gen = self.begin(ViewMode.SINGLE, (format_ymd(day),))
        self.run_slot(gen, 0, lambda: self._fetch(day, day))
        return self.state

    def load_range(self, start: date, end: date) -> ViewState:
        gen = self.begin(ViewMode.RANGE, (f"{format_ymd(start)}..{format_ymd(end)}",))
        self.run_slot(gen, 0, lambda: self._fetch(start, end))
        return self.state

    def load_compare(self, first: date, second: date) -> ViewState:
        """Fetch one record per date concurrently; returns once both have reported."""
        days = (first, second)
        gen = self.begin(ViewMode.COMPARE, tuple(format_ymd(d) for d in days))
        with ThreadPoolExecutor(max_workers=len(days), thread_name_prefix="treasury") as pool:
            futures = [
                pool.submit(self.run_slot, gen, i, functools.partial(self._day_records, d))
                for i, d in enumerate(days)
            ]
            for future in as_completed(futures):
                future.result()
        return self.state
