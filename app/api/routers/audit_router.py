"""
app/api/routers/audit_router.py

Sales audit HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from app.api.dependencies import get_sales_export
from app.schemas.audit import AuditResponse
from app.services.audit_service import AuditService, CSVDecodeError, get_audit_service

router = APIRouter(tags=["audit"])


@router.post("/audit", response_model=AuditResponse)
def audit_csv(
    file: UploadFile = Depends(get_sales_export),
    revenue_target: float | None = Query(
        default=None,
        gt=0,
        description="Optional revenue goal; defaults to AUDIT_REVENUE_TARGET",
    ),
    audit_service: AuditService = Depends(get_audit_service),
) -> AuditResponse:
    """
    Build the sales audit for one uploaded CSV export.

    A file with no usable rows is not an error: ``report`` comes back null.
    """

    try:
        result = audit_service.run_bytes(file.file.read(), revenue_target=revenue_target)
    except CSVDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return AuditResponse.from_result(result)
