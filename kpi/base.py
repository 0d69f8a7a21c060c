"""
kpi/base.py

Abstract base class for sales KPI formula implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseKPIFormula(ABC):
    """
    Contract for KPI formula implementations.

    Subclasses receive a plain dictionary of already-normalized sale values
    and return a plain dictionary of computed metrics. Formulas never see
    raw CSV text and never raise on undefined ratios; they report ``None``
    instead.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`calculate`.
    """

    @abstractmethod
    def calculate(self, inputs: dict[str, Any]) -> dict[str, Any]:
        """
        Compute KPI metrics from *inputs* and return a result dictionary.
        """
