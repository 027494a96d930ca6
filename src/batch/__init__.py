"""
Batch generation: file parsing and the per-row controller.
"""

from src.batch.controller import BatchController, BatchInProgressError
from src.batch.parser import parse_lines, parse_rows, parse_table, read_rows

__all__ = [
    "BatchController",
    "BatchInProgressError",
    "parse_lines",
    "parse_rows",
    "parse_table",
    "read_rows",
]
