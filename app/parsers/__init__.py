"""
app/parsers package marker.
"""

from app.parsers.csv_tokenizer import split_csv_line, tokenize_csv, tokenize_csv_lines

__all__ = [
    "split_csv_line",
    "tokenize_csv",
    "tokenize_csv_lines",
]
