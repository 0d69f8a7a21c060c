"""
app/domain/sale_entry.py

Domain models used by the CSV normalization flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional

RawRecord = Dict[str, Optional[str]]
"""One CSV data line keyed by header name. ``None`` marks an absent position."""


@dataclass(frozen=True)
class SaleEntry:
    """
    One normalized sale, ready for aggregation.
    """

    date: date
    amount: float
    seller: str
    product_name: str
    status: str = ""


@dataclass(frozen=True)
class RowRejection:
    """
    One CSV row that was dropped from the working set.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class IngestionSummary:
    """
    End-of-run normalization summary.
    """

    rows_processed: int
    rows_failed: int
    rejections: tuple[RowRejection, ...] = ()
