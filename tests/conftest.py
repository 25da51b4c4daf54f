"""
Pytest configuration and shared fixtures for yieldscope tests.

Nothing here touches the network: HTTP is faked with MagicMock sessions.
"""
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest


def pytest_configure():
    """Keep tests runnable from a checkout without an editable install."""
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


# =============================================================================
# Settings
# =============================================================================

@pytest.fixture
def settings(monkeypatch):
    """Settings with a fake key, isolated from the developer's .env / environment."""
    from yieldscope.config import Settings

    for var in ("FMP_API_KEY", "FMP_BASE_URL", "YIELDSCOPE_HTTP_TIMEOUT", "YIELDSCOPE_FLAT_TOLERANCE"):
        monkeypatch.delenv(var, raising=False)
    return Settings(_env_file=None, FMP_API_KEY="test_fmp_key")


# =============================================================================
# Sample data
# =============================================================================

@pytest.fixture
def full_row() -> dict[str, Any]:
    """One FMP treasury row as returned by /api/v4/treasury (normal-shaped curve)."""
    return {
        "date": "2024-09-16",
        "month1": 5.11,
        "month2": 5.03,
        "month3": 4.92,
        "month6": 4.55,
        "year1": 4.18,
        "year2": 3.58,
        "year3": 3.45,
        "year5": 3.43,
        "year7": 3.54,
        "year10": 3.62,
        "year20": 4.00,
        "year30": 3.93,
    }


@pytest.fixture
def full_record(full_row):
    from yieldscope.curve.models import YieldRecord

    return YieldRecord(**full_row)


# =============================================================================
# HTTP helpers
# =============================================================================

def make_response(status_code: int = 200, payload: Any = None, text: str | None = None) -> MagicMock:
    import json

    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text if text is not None else json.dumps(payload)
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


def make_session(response: MagicMock | None = None, error: Exception | None = None) -> MagicMock:
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session
