from __future__ import annotations

import json
import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | int = "WARNING") -> None:
    """Route stdlib logging through rich. Safe to call more than once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False))
    root.setLevel(level)
    # urllib3 is chatty at DEBUG.
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))


def _to_jsonable(x: Any) -> Any:
    if is_dataclass(x) and not isinstance(x, type):
        return {k: _to_jsonable(v) for k, v in asdict(x).items()}
    if hasattr(x, "model_dump"):
        return x.model_dump()
    if isinstance(x, Enum):
        return x.value
    if isinstance(x, (datetime, date)):
        return x.isoformat()
    if isinstance(x, float) and x != x:
        return None
    if isinstance(x, (list, tuple)):
        return [_to_jsonable(v) for v in x]
    if isinstance(x, dict):
        return {str(k): _to_jsonable(v) for k, v in x.items()}
    return x


def to_json(payload: dict[str, Any]) -> str:
    return json.dumps({k: _to_jsonable(v) for k, v in payload.items()}, default=str)
