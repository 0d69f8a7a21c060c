"""
app/mappers package marker.
"""

from app.mappers.display_name import clean_display_name

__all__ = [
    "clean_display_name",
]
