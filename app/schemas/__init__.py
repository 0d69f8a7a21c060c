"""
app/schemas package marker.
"""

from app.schemas.audit import (
    AuditReportResponse,
    AuditResponse,
    ProductRankingResponse,
    RowRejectionResponse,
    SellerRankingResponse,
)

__all__ = [
    "AuditReportResponse",
    "AuditResponse",
    "ProductRankingResponse",
    "RowRejectionResponse",
    "SellerRankingResponse",
]
