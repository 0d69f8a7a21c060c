"""
app/domain/audit_report.py

Immutable aggregate snapshot handed to the presentation layer.

Every ranked or time-ordered collection is a tuple so the report can be
shared freely once built. Consumers slice (``top_products(5)``) and format,
but never mutate.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TimelinePoint:
    """Revenue accumulated on one calendar day."""

    day: date
    total_amount: float
    count: int


@dataclass(frozen=True)
class ActivitySlot:
    """
    One day inside the trailing activity window.

    Days without sales are still emitted, with zero totals and
    ``is_empty=True``.
    """

    day: date
    total_amount: float
    count: int
    is_empty: bool


@dataclass(frozen=True)
class TrendPoint:
    day: date
    amount: float


@dataclass(frozen=True)
class SellerRanking:
    """
    Accumulated sales for one seller.

    ``share`` is the percentage of total revenue; ``trend`` is the seller's
    own daily series, oldest first.
    """

    name: str
    total_amount: float
    count: int
    share: float
    trend: tuple[TrendPoint, ...]


@dataclass(frozen=True)
class ProductRanking:
    """
    Accumulated sales for one product.

    ``full_name`` is the exact grouping key; ``display_name`` is the cleaned,
    possibly truncated label.
    """

    full_name: str
    display_name: str
    total_amount: float
    count: int
    share: float


@dataclass(frozen=True)
class AuditReport:
    """
    Full aggregate snapshot derived from one entry set.

    ``average_ticket`` is ``None`` only in degenerate cases; an empty entry
    set never produces a report at all. ``revenue_target`` is carried
    through as given and only feeds ``target_progress``.
    """

    total_revenue: float
    total_count: int
    guaranteed_count: int
    average_ticket: float | None
    timeline: tuple[TimelinePoint, ...]
    activity_window: tuple[ActivitySlot, ...]
    sellers: tuple[SellerRanking, ...]
    products: tuple[ProductRanking, ...]
    revenue_target: float | None = None
    target_progress: float | None = None

    @property
    def start_date(self) -> date:
        return self.timeline[0].day

    @property
    def end_date(self) -> date:
        return self.timeline[-1].day

    def top_products(self, limit: int) -> tuple[ProductRanking, ...]:
        """Return the ``limit`` best-selling products."""
        return self.products[: max(0, limit)]

    def top_sellers(self, limit: int) -> tuple[SellerRanking, ...]:
        """Return the ``limit`` best-selling sellers."""
        return self.sellers[: max(0, limit)]
