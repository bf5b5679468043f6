from __future__ import annotations

from typing import Literal

from ..config import get_config
from .backends.csv_backend import CsvRecordStore
from .interface import RecordStore


def get_record_store(kind: Literal["csv"] = "csv") -> RecordStore:
    if kind == "csv":
        # Reads from configured CSV folder
        config = get_config()
        return CsvRecordStore(data_dir=config.data_dir)
    raise ValueError(f"Unknown record store kind: {kind}")
