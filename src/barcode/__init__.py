"""
Barcode validation and rendering.
"""

from src.barcode.checksum import (
    calculate_check_digit,
    has_valid_check_digit,
)
from src.barcode.renderer import BarcodeRenderer, RenderedArtifact, RenderError
from src.barcode.single import InvalidBarcodeError, generate_single, render_preview
from src.barcode.symbology import SymbologyRule, get_rule, list_symbologies
from src.barcode.validator import is_valid, validate

__all__ = [
    "BarcodeRenderer",
    "RenderedArtifact",
    "RenderError",
    "InvalidBarcodeError",
    "generate_single",
    "render_preview",
    "SymbologyRule",
    "get_rule",
    "list_symbologies",
    "validate",
    "is_valid",
    "calculate_check_digit",
    "has_valid_check_digit",
]
