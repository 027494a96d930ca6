"""
Input validation per barcode symbology.

Runs before any rendering is attempted. Pure and cheap enough to call on
every keystroke for live preview gating.
"""

from src.barcode.symbology import get_rule
from src.models.settings import Symbology
from src.models.validation import ValidationOutcome

UNKNOWN_FORMAT = "unknown format"
EMPTY_INPUT = "empty input"


def validate(code: str, symbology: Symbology | str) -> ValidationOutcome:
    """
    Decide whether a code may be rendered with a symbology.

    Args:
        code: Candidate barcode content
        symbology: Symbology identifier

    Returns:
        Admitted outcome, or a rejection with a human-readable reason
    """
    rule = get_rule(symbology)
    if rule is None:
        return ValidationOutcome.reject(UNKNOWN_FORMAT)

    if not code:
        return ValidationOutcome.reject(EMPTY_INPUT)

    if not rule.accepts(code):
        return ValidationOutcome.reject(rule.rejection_reason)

    return ValidationOutcome.admit()


def is_valid(code: str, symbology: Symbology | str) -> bool:
    """Check a code without keeping the reason."""
    return validate(code, symbology).admitted
