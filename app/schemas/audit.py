"""
app/schemas/audit.py

Response schemas for sales audit endpoints.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from app.domain.audit_report import AuditReport
from app.services.audit_service import AuditResult


class TimelinePointResponse(BaseModel):
    day: date
    total_amount: float = Field(..., ge=0)
    count: int = Field(..., ge=0)


class ActivitySlotResponse(BaseModel):
    day: date
    total_amount: float = Field(..., ge=0)
    count: int = Field(..., ge=0)
    is_empty: bool


class TrendPointResponse(BaseModel):
    day: date
    amount: float = Field(..., ge=0)


class SellerRankingResponse(BaseModel):
    """
    API response model for one ranked seller.
    """

    name: str
    total_amount: float = Field(..., ge=0)
    count: int = Field(..., ge=1)
    share: float = Field(..., ge=0)
    trend: list[TrendPointResponse] = Field(default_factory=list)


class ProductRankingResponse(BaseModel):
    """
    API response model for one ranked product.
    """

    full_name: str
    display_name: str
    total_amount: float = Field(..., ge=0)
    count: int = Field(..., ge=1)
    share: float = Field(..., ge=0)


class AuditReportResponse(BaseModel):
    """
    API response model for a full audit snapshot.
    """

    total_revenue: float = Field(..., ge=0)
    total_count: int = Field(..., ge=1)
    guaranteed_count: int = Field(..., ge=0)
    average_ticket: float | None = None
    revenue_target: float | None = None
    target_progress: float | None = None
    timeline: list[TimelinePointResponse]
    activity_window: list[ActivitySlotResponse]
    sellers: list[SellerRankingResponse]
    products: list[ProductRankingResponse]

    @classmethod
    def from_report(cls, report: AuditReport) -> "AuditReportResponse":
        return cls(
            total_revenue=report.total_revenue,
            total_count=report.total_count,
            guaranteed_count=report.guaranteed_count,
            average_ticket=report.average_ticket,
            revenue_target=report.revenue_target,
            target_progress=report.target_progress,
            timeline=[
                TimelinePointResponse(day=p.day, total_amount=p.total_amount, count=p.count)
                for p in report.timeline
            ],
            activity_window=[
                ActivitySlotResponse(
                    day=s.day,
                    total_amount=s.total_amount,
                    count=s.count,
                    is_empty=s.is_empty,
                )
                for s in report.activity_window
            ],
            sellers=[
                SellerRankingResponse(
                    name=s.name,
                    total_amount=s.total_amount,
                    count=s.count,
                    share=s.share,
                    trend=[TrendPointResponse(day=t.day, amount=t.amount) for t in s.trend],
                )
                for s in report.sellers
            ],
            products=[
                ProductRankingResponse(
                    full_name=p.full_name,
                    display_name=p.display_name,
                    total_amount=p.total_amount,
                    count=p.count,
                    share=p.share,
                )
                for p in report.products
            ],
        )


class RowRejectionResponse(BaseModel):
    """
    API response model for one rejected CSV row.
    """

    row_number: int = Field(..., ge=1)
    message: str
    column: str | None = None
    value: str | None = None


class AuditResponse(BaseModel):
    """
    API response model for one audit run.

    ``report`` is null when the file produced zero usable rows.
    """

    report: AuditReportResponse | None = None
    rows_processed: int = Field(..., ge=0)
    rows_failed: int = Field(..., ge=0)
    rejections: list[RowRejectionResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AuditResult) -> "AuditResponse":
        return cls(
            report=(
                AuditReportResponse.from_report(result.report) if result.report is not None else None
            ),
            rows_processed=result.summary.rows_processed,
            rows_failed=result.summary.rows_failed,
            rejections=[
                RowRejectionResponse(
                    row_number=r.row_number,
                    message=r.message,
                    column=r.column,
                    value=r.value,
                )
                for r in result.summary.rejections
            ],
        )
