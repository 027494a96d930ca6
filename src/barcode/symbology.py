"""
Supported symbologies and their acceptance rules.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from src.models.settings import Symbology

CODE39_PATTERN = re.compile(r"[0-9A-Z\-. $/+%]+")


def _digits(count: int) -> Callable[[str], bool]:
    # ASCII only; str.isdigit() and \d also accept other Unicode digits
    pattern = re.compile(rf"[0-9]{{{count}}}")
    return lambda text: pattern.fullmatch(text) is not None


@dataclass(frozen=True)
class SymbologyRule:
    """One supported barcode format and its acceptance predicate."""

    identifier: Symbology
    label: str
    predicate: Callable[[str], bool]
    rejection_reason: str
    library_name: str  # python-barcode class name

    def accepts(self, text: str) -> bool:
        return self.predicate(text)


SYMBOLOGY_RULES: dict[Symbology, SymbologyRule] = {
    rule.identifier: rule
    for rule in (
        SymbologyRule(
            Symbology.CODE128,
            "Code 128",
            lambda text: len(text) > 0,
            "expected at least one character",
            "code128",
        ),
        SymbologyRule(
            Symbology.CODE39,
            "Code 39",
            lambda text: CODE39_PATTERN.fullmatch(text) is not None,
            "expected digits, uppercase letters, space or - . $ / + %",
            "code39",
        ),
        SymbologyRule(
            Symbology.EAN13,
            "EAN-13",
            _digits(13),
            "expected 13 numeric digits",
            "ean13",
        ),
        SymbologyRule(
            Symbology.EAN8,
            "EAN-8",
            _digits(8),
            "expected 8 numeric digits",
            "ean8",
        ),
        SymbologyRule(
            Symbology.UPC,
            "UPC-A",
            _digits(12),
            "expected 12 numeric digits",
            "upca",
        ),
    )
}


def get_rule(symbology: Symbology | str) -> SymbologyRule | None:
    """
    Look up the rule for a symbology identifier.

    Args:
        symbology: Enum member or its string value (e.g. "EAN13")

    Returns:
        The rule, or None for unknown identifiers
    """
    try:
        return SYMBOLOGY_RULES[Symbology(symbology)]
    except ValueError:
        return None


def list_symbologies() -> list[SymbologyRule]:
    """Get all rules in display order."""
    return list(SYMBOLOGY_RULES.values())
