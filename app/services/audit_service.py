"""
app/services/audit_service.py

Service layer for the sales audit pipeline.

One call runs the whole pipeline to completion:

    1. tokenize_csv_lines()         : raw text to line-numbered records
    2. SaleRecordNormalizer         : records to SaleEntry, bad dates dropped
    3. AggregationService           : entries to AuditReport (or None)

Nothing is kept between runs. A new upload builds a new AuditResult and
the previous one is simply discarded by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from app.config import get_audit_settings
from app.domain.audit_report import AuditReport
from app.domain.sale_entry import IngestionSummary, RowRejection, SaleEntry
from app.parsers.csv_tokenizer import tokenize_csv_lines
from app.services.aggregation_service import AggregationService
from app.validators.sale_validator import SaleRecordNormalizer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVDecodeError(ValueError):
    """
    Raised when uploaded bytes cannot be decoded as UTF-8 text.
    """


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuditResult:
    """
    Outcome of one pipeline run.

    ``report`` is ``None`` when the file produced zero usable rows.
    """

    report: AuditReport | None
    summary: IngestionSummary

    @property
    def has_report(self) -> bool:
        return self.report is not None


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class AuditService:
    """
    Coordinates CSV tokenizing, normalization and aggregation.
    """

    def __init__(
        self,
        *,
        max_rejections: int = 500,
        log_rejections: bool = True,
        default_revenue_target: float | None = None,
        normalizer: SaleRecordNormalizer | None = None,
        aggregator: AggregationService | None = None,
    ) -> None:
        self._max_rejections = max(1, max_rejections)
        self._log_rejections = log_rejections
        self._default_revenue_target = default_revenue_target
        self._normalizer = normalizer or SaleRecordNormalizer()
        self._aggregator = aggregator or AggregationService()

    def run(self, text: str, *, revenue_target: float | None = None) -> AuditResult:
        """
        Run the full pipeline on CSV *text*.

        Malformed rows never raise; they are counted in the summary and the
        first ``max_rejections`` of them are kept for display.
        """

        entries, summary = self.normalize(text)
        target = revenue_target if revenue_target is not None else self._default_revenue_target
        report = self._aggregator.aggregate(entries, revenue_target=target)

        if report is None:
            logger.info(
                "Audit produced no report rows_processed=%d rows_failed=%d",
                summary.rows_processed,
                summary.rows_failed,
            )
        else:
            logger.info(
                "Audit complete rows_processed=%d rows_failed=%d revenue=%.2f",
                summary.rows_processed,
                summary.rows_failed,
                report.total_revenue,
            )
        return AuditResult(report=report, summary=summary)

    def run_bytes(self, raw: bytes, *, revenue_target: float | None = None) -> AuditResult:
        """
        Decode *raw* as UTF-8 (a leading BOM is tolerated) and run the pipeline.
        """

        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CSVDecodeError("CSV must be UTF-8 encoded.") from exc
        return self.run(text, revenue_target=revenue_target)

    def normalize(self, text: str) -> tuple[list[SaleEntry], IngestionSummary]:
        """
        Tokenize and normalize *text* without aggregating.
        """

        entries: list[SaleEntry] = []
        rows_failed = 0
        captured: list[RowRejection] = []

        # Row numbers are physical file lines; the header is line 1.
        for row_number, raw in tokenize_csv_lines(text):
            entry, rejections = self._normalizer.normalize(raw=raw, row_number=row_number)
            if entry is None:
                rows_failed += 1
                for rejection in rejections:
                    self._record_rejection(captured, rejection)
                continue
            entries.append(entry)

        summary = IngestionSummary(
            rows_processed=len(entries),
            rows_failed=rows_failed,
            rejections=tuple(captured),
        )
        return entries, summary

    def _record_rejection(self, captured: list[RowRejection], rejection: RowRejection) -> None:
        if len(captured) < self._max_rejections:
            captured.append(rejection)
        if self._log_rejections:
            logger.debug(
                "CSV row rejected row=%s column=%s message=%s value=%r",
                rejection.row_number,
                rejection.column,
                rejection.message,
                rejection.value,
            )


@lru_cache(maxsize=1)
def get_audit_service() -> AuditService:
    """
    Return a cached audit service built from runtime settings.
    """

    settings = get_audit_settings()
    return AuditService(
        max_rejections=settings.max_rejections,
        log_rejections=settings.log_rejections,
        default_revenue_target=settings.revenue_target,
        normalizer=SaleRecordNormalizer(
            default_seller=settings.default_seller,
            default_product=settings.default_product,
        ),
        aggregator=AggregationService.from_settings(settings),
    )
