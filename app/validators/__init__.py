"""
app/validators package marker.
"""

from app.validators.sale_validator import SaleRecordNormalizer

__all__ = [
    "SaleRecordNormalizer",
]
