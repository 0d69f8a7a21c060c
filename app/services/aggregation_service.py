"""
app/services/aggregation_service.py

Aggregation layer that turns normalized sale entries into an AuditReport.

Grouping rules
--------------
Every grouping uses an insertion-ordered ``dict``:

    days      keyed by the real ``datetime.date`` (never a display label)
    sellers   keyed by the seller name, first-seen order
    products  keyed by the full product name, first-seen order

Rankings sort descending by total amount with Python's stable sort, so
groups with equal totals keep their first-seen order.

Purity
------
``aggregate`` is a pure function of its input. It keeps no state between
calls and never mutates the entries it receives; running it twice on the
same entries yields equal reports.

KPI formulas live in :mod:`kpi.sales`. Display-name cleaning lives in
:mod:`app.mappers.display_name`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Sequence

from app.config import AuditSettings
from app.domain.audit_report import (
    ActivitySlot,
    AuditReport,
    ProductRanking,
    SellerRanking,
    TimelinePoint,
    TrendPoint,
)
from app.domain.sale_entry import SaleEntry
from app.mappers.display_name import clean_display_name
from kpi.sales import SalesKPIFormula

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITY_WINDOW_DAYS = 30


# ---------------------------------------------------------------------------
# Internal accumulators
# ---------------------------------------------------------------------------


@dataclass
class _Totals:
    total_amount: float = 0.0
    count: int = 0


@dataclass
class _SellerTotals:
    total_amount: float = 0.0
    count: int = 0
    daily: dict[date, float] = field(default_factory=dict)


def _share(amount: float, total_revenue: float) -> float:
    if total_revenue == 0 or not math.isfinite(total_revenue) or not math.isfinite(amount):
        return 0.0
    return amount / total_revenue * 100.0


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class AggregationService:
    """
    Builds :class:`AuditReport` snapshots from normalized entries.

    Parameters
    ----------
    activity_window_days:
        Length of the trailing activity window ending on the latest date.
    guarantee_marker:
        Status substring counted towards ``guaranteed_count``.
    display_name:
        Callable deriving a product's display label from its full name.
    kpi_formula:
        Formula used for the headline KPIs.
    """

    def __init__(
        self,
        *,
        activity_window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS,
        guarantee_marker: str = "garantiz",
        display_name: Callable[[str], str] = clean_display_name,
        kpi_formula: SalesKPIFormula | None = None,
    ) -> None:
        self._window_days = max(1, activity_window_days)
        self._guarantee_marker = guarantee_marker
        self._display_name = display_name
        self._kpi_formula = kpi_formula or SalesKPIFormula()

    @classmethod
    def from_settings(cls, settings: AuditSettings) -> "AggregationService":
        def display_name(full_name: str) -> str:
            return clean_display_name(
                full_name,
                filler_prefixes=settings.filler_prefixes,
                max_length=settings.display_name_max_length,
            )

        return cls(
            activity_window_days=settings.activity_window_days,
            guarantee_marker=settings.guarantee_marker,
            display_name=display_name,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def aggregate(
        self,
        entries: Sequence[SaleEntry],
        *,
        revenue_target: float | None = None,
    ) -> AuditReport | None:
        """
        Build the full report for *entries*.

        Returns ``None`` when *entries* is empty: there is no report to show
        and no ratio may be computed.
        """

        if not entries:
            logger.debug("aggregate called with no entries; no report")
            return None

        kpis = self._kpi_formula.calculate(
            {
                "amounts": [entry.amount for entry in entries],
                "statuses": [entry.status for entry in entries],
                "guarantee_marker": self._guarantee_marker,
                "revenue_target": revenue_target,
            }
        )
        total_revenue: float = kpis["total_revenue"]

        report = AuditReport(
            total_revenue=total_revenue,
            total_count=kpis["total_count"],
            guaranteed_count=kpis["guaranteed_count"],
            average_ticket=kpis["average_ticket"],
            timeline=self.build_timeline(entries),
            activity_window=self.build_activity_window(entries),
            sellers=self.rank_sellers(entries, total_revenue=total_revenue),
            products=self.rank_products(entries, total_revenue=total_revenue),
            revenue_target=revenue_target,
            target_progress=kpis["target_progress"],
        )
        logger.debug(
            "aggregate entries=%d revenue=%.2f sellers=%d products=%d",
            report.total_count,
            report.total_revenue,
            len(report.sellers),
            len(report.products),
        )
        return report

    def build_timeline(self, entries: Sequence[SaleEntry]) -> tuple[TimelinePoint, ...]:
        """
        One point per distinct calendar day, ascending by date.
        """

        days = self._group_by_day(entries)
        return tuple(
            TimelinePoint(day=day, total_amount=totals.total_amount, count=totals.count)
            for day, totals in sorted(days.items())
        )

    def build_activity_window(self, entries: Sequence[SaleEntry]) -> tuple[ActivitySlot, ...]:
        """
        Dense trailing window ending on the latest date, oldest slot first.

        Entries older than the window are left out of it; they still count
        everywhere else in the report.
        """

        if not entries:
            return ()
        days = self._group_by_day(entries)
        max_date = max(days)

        slots: list[ActivitySlot] = []
        for offset in range(self._window_days - 1, -1, -1):
            day = max_date - timedelta(days=offset)
            totals = days.get(day)
            if totals is None:
                slots.append(ActivitySlot(day=day, total_amount=0.0, count=0, is_empty=True))
            else:
                slots.append(
                    ActivitySlot(
                        day=day,
                        total_amount=totals.total_amount,
                        count=totals.count,
                        is_empty=False,
                    )
                )
        return tuple(slots)

    def rank_sellers(
        self,
        entries: Sequence[SaleEntry],
        *,
        total_revenue: float | None = None,
    ) -> tuple[SellerRanking, ...]:
        """
        Sellers by total amount, descending, each with its own daily trend.
        """

        sellers: dict[str, _SellerTotals] = {}
        for entry in entries:
            totals = sellers.setdefault(entry.seller, _SellerTotals())
            totals.total_amount += entry.amount
            totals.count += 1
            totals.daily[entry.date] = totals.daily.get(entry.date, 0.0) + entry.amount

        revenue = self._revenue(entries, total_revenue)
        ranked = [
            SellerRanking(
                name=name,
                total_amount=totals.total_amount,
                count=totals.count,
                share=_share(totals.total_amount, revenue),
                trend=tuple(
                    TrendPoint(day=day, amount=amount)
                    for day, amount in sorted(totals.daily.items())
                ),
            )
            for name, totals in sellers.items()
        ]
        ranked.sort(key=lambda seller: seller.total_amount, reverse=True)
        return tuple(ranked)

    def rank_products(
        self,
        entries: Sequence[SaleEntry],
        *,
        total_revenue: float | None = None,
    ) -> tuple[ProductRanking, ...]:
        """
        Products by total amount, descending, grouped by their full name.
        """

        products: dict[str, _Totals] = {}
        for entry in entries:
            totals = products.setdefault(entry.product_name, _Totals())
            totals.total_amount += entry.amount
            totals.count += 1

        revenue = self._revenue(entries, total_revenue)
        ranked = [
            ProductRanking(
                full_name=full_name,
                display_name=self._display_name(full_name),
                total_amount=totals.total_amount,
                count=totals.count,
                share=_share(totals.total_amount, revenue),
            )
            for full_name, totals in products.items()
        ]
        ranked.sort(key=lambda product: product.total_amount, reverse=True)
        return tuple(ranked)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _group_by_day(entries: Sequence[SaleEntry]) -> dict[date, _Totals]:
        days: dict[date, _Totals] = {}
        for entry in entries:
            totals = days.setdefault(entry.date, _Totals())
            totals.total_amount += entry.amount
            totals.count += 1
        return days

    @staticmethod
    def _revenue(entries: Sequence[SaleEntry], total_revenue: float | None) -> float:
        if total_revenue is not None:
            return total_revenue
        return sum(entry.amount for entry in entries)
