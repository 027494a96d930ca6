"""
Pydantic models for settings, validation results and batch runs.
"""

from src.models.batch import (
    BatchResult,
    BatchRow,
    BatchState,
    RowOutcome,
    RowStatus,
)
from src.models.settings import (
    REFERENCE_RESOLUTION,
    ExportSettings,
    OutputFormat,
    RenderSettings,
    Symbology,
)
from src.models.validation import ValidationOutcome

__all__ = [
    # Settings
    "REFERENCE_RESOLUTION",
    "ExportSettings",
    "OutputFormat",
    "RenderSettings",
    "Symbology",
    # Validation
    "ValidationOutcome",
    # Batch
    "BatchResult",
    "BatchRow",
    "BatchState",
    "RowOutcome",
    "RowStatus",
]
