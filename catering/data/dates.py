from __future__ import annotations

from datetime import date, datetime
from typing import Any

import pandas as pd


def to_calendar_date(value: Any) -> date:
    """Normalize a date, datetime, pandas Timestamp or ISO string to a calendar date.

    Any time-of-day component is dropped, so ``2024-05-01T18:30`` and
    ``2024-05-01`` compare equal.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        return pd.Timestamp(text).date()
    raise ValueError(f"Cannot interpret {value!r} as a calendar date")
