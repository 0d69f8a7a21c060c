"""
app/api/routers package marker.
"""

from app.api.routers.audit_router import router as audit_router

__all__ = [
    "audit_router",
]
