"""
Financial Modeling Prep treasury endpoint.

GET {base}/v4/treasury?from=YYYY-MM-DD&to=YYYY-MM-DD&apikey=KEY

Response: JSON array, most recent date first, one object per date with
``date`` plus ``month1 ... year30`` (percent, any of them may be missing).
"""
from __future__ import annotations

import logging
import re
import time
from datetime import date
from typing import Any

import requests
from pydantic import TypeAdapter, ValidationError
from requests.exceptions import InvalidURL, MissingSchema, RequestException

from yieldscope.config import Settings
from yieldscope.curve.models import YieldRecord
from yieldscope.utils.dates import format_ymd

logger = logging.getLogger(__name__)

TREASURY_PATH = "/v4/treasury"

_RECORDS = TypeAdapter(list[YieldRecord])


class TreasuryError(RuntimeError):
    """A treasury fetch failed; ``str(err)`` is the user-facing message."""


class TreasuryStatusError(TreasuryError):
    def __init__(self, status_code: int, body: str = ""):
        self.status_code = int(status_code)
        self.body = body
        super().__init__(f"API returned status code {self.status_code}")


class TreasuryFetchError(TreasuryError):
    pass


def _ymd(d: date | str) -> str:
    return d if isinstance(d, str) else format_ymd(d)


_APIKEY_RE = re.compile(r"(apikey=)[^&)\s'\"]*")


def _redact(text: str, api_key: str = "") -> str:
    """Mask the apikey query value (and the bare key, if given) anywhere in ``text``."""
    text = _APIKEY_RE.sub(r"\1***", text)
    return text.replace(api_key, "***") if api_key else text


def build_treasury_url(base_url: str, from_date: date | str, to_date: date | str, api_key: str) -> str:
    try:
        req = requests.Request(
            "GET",
            f"{base_url.rstrip('/')}{TREASURY_PATH}",
            params={"from": _ymd(from_date), "to": _ymd(to_date), "apikey": api_key},
        ).prepare()
    except (InvalidURL, MissingSchema) as e:
        raise TreasuryFetchError("Invalid URL.") from e
    return str(req.url)


def decode_treasury_payload(payload: Any) -> list[YieldRecord]:
    """Map the JSON body onto YieldRecord. Raises ValueError on anything unexpected."""
    if isinstance(payload, dict) and "Error Message" in payload:
        # FMP reports some failures (bad key, plan limits) as 200 + error object.
        raise ValueError(str(payload["Error Message"]))
    return _RECORDS.validate_python(payload)


def fetch_treasury_rates(
    settings: Settings,
    from_date: date | str,
    to_date: date | str,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> list[YieldRecord]:
    """
    Fetch par-yield records for ``from_date``..``to_date`` (inclusive).

    Raises:
        TreasuryStatusError: provider answered with anything but HTTP 200.
        TreasuryFetchError: transport failure, timeout, or an undecodable body.
    """
    url = build_treasury_url(settings.fmp_base_url, from_date, to_date, settings.fmp_api_key)
    http = session if session is not None else requests
    t0 = time.monotonic()

    try:
        resp = http.get(url, timeout=timeout if timeout is not None else settings.http_timeout)
    except RequestException as e:
        # requests puts the full URL (key included) into connection errors.
        reason = _redact(str(e), settings.fmp_api_key)
        logger.debug("Treasury request failed for %s: %s", _redact(url), reason)
        raise TreasuryFetchError(f"Failed to fetch data: {reason}") from e

    logger.debug(
        "GET %s -> %s in %.0fms", _redact(url), resp.status_code, (time.monotonic() - t0) * 1000
    )

    if resp.status_code != 200:
        logger.debug("API Error Response: %s", resp.text)
        raise TreasuryStatusError(resp.status_code, resp.text)

    logger.debug("JSON Response: %s", resp.text)

    try:
        records = decode_treasury_payload(resp.json())
    except (ValueError, ValidationError) as e:
        raise TreasuryFetchError(f"Failed to fetch data: {e}") from e

    logger.info("Treasury returned %d records for %s..%s", len(records), _ymd(from_date), _ymd(to_date))
    return records


def fetch_treasury_day(
    settings: Settings,
    day: date | str,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> YieldRecord | None:
    """Single-date fetch. ``None`` when the provider has no row (weekend, holiday, future date)."""
    records = fetch_treasury_rates(settings, day, day, session=session, timeout=timeout)
    return records[0] if records else None
