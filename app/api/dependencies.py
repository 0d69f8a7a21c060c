"""
app/api/dependencies.py

Upload guard for sales exports posted to the audit endpoint.

An export is accepted when either its filename ends in ``.csv`` or the
client labelled it with a CSV-like media type. Spreadsheet tools often
send ``application/vnd.ms-excel`` for plain CSV downloads, so that label
is accepted too. Content is not sniffed; decoding errors surface later
from the audit service.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

SALES_EXPORT_MEDIA_TYPES = frozenset(
    {
        "text/csv",
        "application/csv",
        "application/vnd.ms-excel",
    }
)


def _media_type(upload: UploadFile) -> str:
    # "text/csv; charset=utf-8" -> "text/csv"
    return (upload.content_type or "").partition(";")[0].strip().lower()


def get_sales_export(file: UploadFile = File(...)) -> UploadFile:
    """
    Return the uploaded sales export, or reject it with 400 when it is not a CSV.
    """

    filename = (file.filename or "").strip().lower()
    if filename.endswith(".csv") or _media_type(file) in SALES_EXPORT_MEDIA_TYPES:
        return file

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Sales export must be a CSV file.",
    )
