"""
Validation outcome model.
"""

from pydantic import BaseModel, ConfigDict


class ValidationOutcome(BaseModel):
    """Result of checking one code against one symbology."""

    model_config = ConfigDict(frozen=True)

    admitted: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.admitted

    @classmethod
    def admit(cls) -> "ValidationOutcome":
        return cls(admitted=True)

    @classmethod
    def reject(cls, reason: str) -> "ValidationOutcome":
        return cls(admitted=False, reason=reason)
