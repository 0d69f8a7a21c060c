"""
app/validators/sale_validator.py

Row-level normalization of raw CSV records into typed sale entries.

Only an unparseable date drops a row. Amount, seller and product problems
degrade to defaults so dirty exports still produce a report.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Sequence

from app.domain.sale_entry import RawRecord, RowRejection, SaleEntry

DATE_ALIASES: tuple[str, ...] = ("Fecha Ingreso", "fecha_ingreso")
AMOUNT_ALIASES: tuple[str, ...] = ("Cuota Actual", "cuota_actual")
SELLER_ALIASES: tuple[str, ...] = ("Cargado por", "cargado_por")
PRODUCT_ALIASES: tuple[str, ...] = ("Producto",)
STATUS_ALIASES: tuple[str, ...] = ("Estado", "estado")

_NON_AMOUNT_CHARS = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")


class SaleRecordNormalizer:
    """
    Converts raw CSV records into :class:`SaleEntry` values.
    """

    def __init__(
        self,
        *,
        default_seller: str = "Sitio Web",
        default_product: str = "Sin Nombre",
        date_aliases: Sequence[str] = DATE_ALIASES,
        amount_aliases: Sequence[str] = AMOUNT_ALIASES,
        seller_aliases: Sequence[str] = SELLER_ALIASES,
        product_aliases: Sequence[str] = PRODUCT_ALIASES,
        status_aliases: Sequence[str] = STATUS_ALIASES,
    ) -> None:
        self._default_seller = default_seller
        self._default_product = default_product
        self._date_aliases = tuple(date_aliases)
        self._amount_aliases = tuple(amount_aliases)
        self._seller_aliases = tuple(seller_aliases)
        self._product_aliases = tuple(product_aliases)
        self._status_aliases = tuple(status_aliases)

    def normalize(
        self,
        *,
        raw: RawRecord,
        row_number: int,
    ) -> tuple[SaleEntry | None, list[RowRejection]]:
        """
        Normalize one raw record.

        Returns the entry and an empty list, or ``None`` and the reasons the
        row was rejected.
        """

        raw_date = self._first_present(raw, self._date_aliases)
        sale_date = self.parse_date(raw_date)
        if sale_date is None:
            return None, [
                RowRejection(
                    row_number=row_number,
                    column=self._date_aliases[0],
                    message="Missing date." if raw_date is None else "Invalid date format.",
                    value=raw_date,
                )
            ]

        entry = SaleEntry(
            date=sale_date,
            amount=self.parse_amount(self._first_present(raw, self._amount_aliases)),
            seller=self._parse_seller(self._first_present(raw, self._seller_aliases)),
            product_name=self._parse_product(self._first_present(raw, self._product_aliases)),
            status=self._first_present(raw, self._status_aliases) or "",
        )
        return entry, []

    @staticmethod
    def parse_date(value: str | None) -> date | None:
        """
        Parse ``YYYY-MM-DD`` or ``DD-MM-YYYY`` (slashes accepted).

        A four-digit first component means year first; anything else is
        read as day first. Returns ``None`` for any other shape or for a
        date that does not exist on the calendar.
        """

        if value is None:
            return None
        parts = [part.strip() for part in value.replace("/", "-").split("-")]
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            return None

        if len(parts[0]) == 4:
            year, month, day = parts
        else:
            day, month, year = parts
        try:
            return date(int(year), int(month), int(day))
        except ValueError:
            return None

    @staticmethod
    def parse_amount(value: str | None) -> float:
        """
        Keep only digits and dots, then read the leading decimal number.

        Commas are not decimal separators: ``"$1.234,56"`` reads as
        ``1.23456``. Anything unreadable, or too large for a float, is
        ``0.0``.
        """

        if value is None:
            return 0.0
        cleaned = _NON_AMOUNT_CHARS.sub("", value)
        match = _LEADING_NUMBER.match(cleaned)
        if match is None:
            return 0.0
        amount = float(match.group(0))
        if not math.isfinite(amount):
            return 0.0
        return amount

    def _parse_seller(self, value: str | None) -> str:
        if self._is_blank(value) or value.strip() == "0":
            return self._default_seller
        return value.strip()

    def _parse_product(self, value: str | None) -> str:
        if self._is_blank(value):
            return self._default_product
        return value.strip()

    @staticmethod
    def _first_present(raw: RawRecord, aliases: Sequence[str]) -> str | None:
        # An empty string falls through to the next alias.
        for alias in aliases:
            value = raw.get(alias)
            if value:
                return value
        return None

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""
