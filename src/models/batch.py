"""
Batch row and batch run models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BatchRow(BaseModel):
    """
    One item to render in batch mode.

    The label falls back to the code when missing or empty.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    label: str = ""

    @model_validator(mode="before")
    @classmethod
    def default_label(cls, data):
        if isinstance(data, dict) and not data.get("label"):
            data = {**data, "label": data.get("code", "")}
        return data


class BatchState(str, Enum):
    """State of the batch controller."""

    IDLE = "idle"
    RUNNING = "running"


class RowStatus(str, Enum):
    """What happened to one batch row."""

    EXPORTED = "exported"
    SKIPPED = "skipped"
    FAILED = "failed"


class RowOutcome(BaseModel):
    """Outcome of processing one batch row."""

    index: int = Field(..., description="Position of the row in the input")
    code: str
    status: RowStatus
    filename: str | None = Field(None, description="Name the artifact was exported under")
    reason: str | None = Field(None, description="Why the row was skipped or failed")


class BatchResult(BaseModel):
    """Summary of a batch run."""

    outcomes: list[RowOutcome] = Field(default_factory=list)
    cancelled: bool = False

    def _count(self, status: RowStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def exported(self) -> int:
        return self._count(RowStatus.EXPORTED)

    @property
    def skipped(self) -> int:
        return self._count(RowStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(RowStatus.FAILED)

    @property
    def filenames(self) -> list[str]:
        """Exported filenames in emission order."""
        return [o.filename for o in self.outcomes if o.status == RowStatus.EXPORTED and o.filename]
