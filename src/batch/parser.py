"""
Turn uploaded file content into batch rows.

- .csv files are tabular: a header row, code in "barcode", label in "text"
- anything else is line-oriented: one code per non-blank line
"""

import csv
from io import StringIO
from itertools import dropwhile
from pathlib import Path

import structlog

from src.models.batch import BatchRow

logger = structlog.get_logger(__name__)

TABULAR_EXTENSIONS = {".csv"}
CODE_COLUMN = "barcode"
LABEL_COLUMN = "text"


def is_tabular(filename: str) -> bool:
    """Check whether a filename names a tabular (CSV) file."""
    return Path(filename).suffix.lower() in TABULAR_EXTENSIONS


def parse_lines(content: str) -> list[BatchRow]:
    """Parse line-oriented content; code and label are the trimmed line."""
    rows = []
    for line in content.split("\n"):
        code = line.strip()
        if code:
            rows.append(BatchRow(code=code, label=code))
    return rows


def _find_column(fieldnames: list[str], wanted: str) -> str | None:
    """Find a header case-insensitively."""
    for name in fieldnames:
        if name is not None and name.strip().lower() == wanted:
            return name
    return None


def parse_table(content: str) -> list[BatchRow]:
    """
    Parse CSV content with a header row.

    The code comes from the "barcode" column, falling back to the first
    column; the label from the "text" column, falling back to the code.
    Blank lines before the header and blank rows are skipped. Malformed
    CSV yields the rows read before the error.
    """
    lines = dropwhile(lambda line: not line.strip(), StringIO(content, newline=""))
    reader = csv.DictReader(lines)
    rows: list[BatchRow] = []

    try:
        fieldnames = reader.fieldnames or []
        if not fieldnames:
            logger.warning("CSV content has no header row")
            return rows

        code_column = _find_column(fieldnames, CODE_COLUMN)
        label_column = _find_column(fieldnames, LABEL_COLUMN)
        if code_column is None:
            code_column = fieldnames[0]
            logger.info("No barcode column, using first column", column=code_column)

        for record in reader:
            values = [v for v in record.values() if isinstance(v, str)]
            if not any(v.strip() for v in values):
                continue

            code = (record.get(code_column) or "").strip()
            label = (record.get(label_column) or "").strip() if label_column else ""
            rows.append(BatchRow(code=code, label=label))

    except csv.Error as e:
        logger.warning(
            "Malformed CSV content",
            line=reader.line_num,
            rows_read=len(rows),
            error=str(e),
        )

    return rows


def parse_rows(content: str, filename: str) -> list[BatchRow]:
    """
    Parse uploaded file content into batch rows.

    Args:
        content: Decoded file text
        filename: Uploaded filename; its extension selects the format

    Returns:
        Rows in file order (possibly empty)
    """
    content = content.lstrip("\ufeff")
    rows = parse_table(content) if is_tabular(filename) else parse_lines(content)
    logger.info("Parsed batch file", filename=filename, rows=len(rows))
    return rows


def read_rows(path: str | Path) -> list[BatchRow]:
    """Read and parse a batch file from disk."""
    path = Path(path)
    content = path.read_text(encoding="utf-8-sig")
    return parse_rows(content, path.name)
