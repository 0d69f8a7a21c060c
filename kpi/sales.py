"""
kpi/sales.py

Sales dashboard KPI formula implementation.

Expected inputs
---------------
amounts : list[float]
    Amount of each normalized sale entry.
statuses : list[str]
    Status text of each entry, aligned with ``amounts``.
guarantee_marker : str
    Substring that marks a sale as guaranteed (case-insensitive).
revenue_target : float | None
    Revenue goal for the period. Optional.

Formulas
--------
Total Revenue     = sum(amounts)
Total Count       = len(amounts)
Guaranteed Count  = count of statuses containing guarantee_marker
Average Ticket    = total_revenue / total_count
Target Progress   = total_revenue / revenue_target * 100

Division-by-zero cases return None for the affected metric.
"""

from __future__ import annotations

import math
from typing import Any

from kpi.base import BaseKPIFormula

_SENTINEL = None  # value stored when a metric cannot be computed


class SalesKPIFormula(BaseKPIFormula):
    """
    Deterministic sales KPI calculations with safe division-by-zero handling.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, Any]:
        """
        Compute Total Revenue, Total Count, Guaranteed Count, Average Ticket
        and Target Progress from *inputs*.

        Returns
        -------
        dict
            Keys: ``total_revenue``, ``total_count``, ``guaranteed_count``,
            ``average_ticket``, ``target_progress``.
        """
        amounts: list[float] = inputs["amounts"]
        statuses: list[str] = inputs.get("statuses", [])
        marker: str = inputs.get("guarantee_marker", "")
        revenue_target: float | None = inputs.get("revenue_target")

        total_revenue = _total_revenue(amounts)
        total_count = len(amounts)

        return {
            "total_revenue": total_revenue,
            "total_count": total_count,
            "guaranteed_count": _guaranteed_count(statuses, marker),
            "average_ticket": _average_ticket(total_revenue, total_count),
            "target_progress": _target_progress(total_revenue, revenue_target),
        }


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def _total_revenue(amounts: list[float]) -> float:
    return sum(amounts)


def _guaranteed_count(statuses: list[str], marker: str) -> int:
    """
    Count statuses that contain *marker*, ignoring case.

    An empty marker matches nothing.
    """
    needle = marker.strip().lower()
    if not needle:
        return 0
    return sum(1 for status in statuses if needle in (status or "").lower())


def _average_ticket(total_revenue: float, total_count: int) -> float | None:
    """
    Average Ticket = total_revenue / total_count.

    Returns None when there are no entries or the total overflowed.
    """
    if total_count == 0 or not math.isfinite(total_revenue):
        return _SENTINEL
    return total_revenue / total_count


def _target_progress(total_revenue: float, revenue_target: float | None) -> float | None:
    """
    Target Progress = total_revenue / revenue_target * 100.

    Returns None when no positive target is configured or the total
    overflowed.
    """
    if revenue_target is None or revenue_target <= 0 or not math.isfinite(total_revenue):
        return _SENTINEL
    return total_revenue / revenue_target * 100.0
