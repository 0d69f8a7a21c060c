"""
app/domain package marker.
"""

from app.domain.audit_report import (
    ActivitySlot,
    AuditReport,
    ProductRanking,
    SellerRanking,
    TimelinePoint,
    TrendPoint,
)
from app.domain.sale_entry import IngestionSummary, RawRecord, RowRejection, SaleEntry

__all__ = [
    "ActivitySlot",
    "AuditReport",
    "IngestionSummary",
    "ProductRanking",
    "RawRecord",
    "RowRejection",
    "SaleEntry",
    "SellerRanking",
    "TimelinePoint",
    "TrendPoint",
]
