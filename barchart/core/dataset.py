"""Built-in team scores and the coercion step that turns raw rows into records."""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import numpy as np
import pandas as pd

from barchart.models import InvalidInput, Record
from barchart.utils.logger import configure_logger, log_extra

logger = configure_logger(__name__)

TEAM_SCORES: Tuple[Dict[str, Any], ...] = (
    {"team": "Boston", "value": 100},
    {"team": "Detroit", "value": 85},
    {"team": "New York", "value": 80},
    {"team": "Chicago", "value": 75},
    {"team": "Atlanta", "value": 30},
)


def coerce_value(raw: Any) -> float:
    """Convert ``raw`` to a non-negative finite float or raise ``InvalidInput``."""

    if isinstance(raw, bool):
        raise InvalidInput(f"Value is not numeric: {raw!r}", value=raw)
    if isinstance(raw, (int, float, np.number)):
        number = float(raw)
    elif isinstance(raw, str):
        number = float(pd.to_numeric(raw.strip(), errors="coerce"))
    else:
        raise InvalidInput(f"Value is not numeric: {raw!r}", value=raw)

    if math.isnan(number):
        raise InvalidInput(f"Value is not numeric: {raw!r}", value=raw)
    if math.isinf(number):
        raise InvalidInput(f"Value is not finite: {raw!r}", value=raw)
    if number < 0:
        raise InvalidInput(f"Value must not be negative: {raw!r}", value=raw)
    return number


def _category_of(row: Mapping[str, Any]) -> str:
    for key in ("team", "category"):
        if key in row and row[key] is not None:
            return str(row[key])
    raise InvalidInput("Row has no 'team' or 'category' key", value=dict(row))


def load_dataset(rows: Iterable[Mapping[str, Any]]) -> Tuple[Record, ...]:
    """Coerce raw rows into an ordered, validated tuple of records.

    Row order is kept as display order. Fails on an empty input, a value that
    does not coerce to a non-negative finite number, or a repeated category.
    """

    rows = list(rows)
    if not rows:
        raise InvalidInput("Dataset is empty", value=rows)

    frame = pd.DataFrame(
        {
            "category": [_category_of(row) for row in rows],
            "value": [row.get("value") for row in rows],
        }
    )
    frame["value"] = frame["value"].map(coerce_value)

    duplicated = frame.loc[frame["category"].duplicated(), "category"].tolist()
    if duplicated:
        logger.warning("Rejected dataset with duplicate categories", extra=log_extra(categories=duplicated))
        raise InvalidInput(f"Duplicate categories: {', '.join(duplicated)}", value=duplicated)

    records: List[Record] = [
        Record(category=category, value=value)
        for category, value in zip(frame["category"], frame["value"])
    ]
    logger.debug("Dataset loaded", extra=log_extra(records=len(records)))
    return tuple(records)
