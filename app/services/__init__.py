"""
app/services package marker.
"""

from app.services.aggregation_service import AggregationService
from app.services.audit_service import (
    AuditResult,
    AuditService,
    CSVDecodeError,
    get_audit_service,
)

__all__ = [
    "AggregationService",
    "AuditResult",
    "AuditService",
    "CSVDecodeError",
    "get_audit_service",
]
