"""
GTIN check digit arithmetic for EAN-13, EAN-8 and UPC-A.

The validator only gates length and digit class; the renderer uses these
helpers to refuse codes whose last digit is not the expected check digit.
"""

from src.models.settings import Symbology

# Total length including the check digit
GTIN_LENGTHS = {
    Symbology.EAN13: 13,
    Symbology.EAN8: 8,
    Symbology.UPC: 12,
}


def calculate_check_digit(body: str) -> int:
    """
    Calculate the GTIN check digit for the digits preceding it.

    Algorithm:
    1. Starting from the rightmost body digit, multiply digits alternately by 3 and 1
    2. Sum all results
    3. Check digit = (10 - (sum mod 10)) mod 10

    Counting from the right makes the same routine valid for EAN-13
    (weights 1,3,... from the left), EAN-8 and UPC-A (weights 3,1,...).
    """
    if not body:
        raise ValueError("Body must contain at least one digit")

    total = 0
    for i, digit in enumerate(reversed(body)):
        if digit not in "0123456789":
            raise ValueError(f"Invalid character in code: {digit}")
        weight = 3 if i % 2 == 0 else 1
        total += int(digit) * weight

    return (10 - (total % 10)) % 10


def has_valid_check_digit(code: str, symbology: Symbology) -> bool:
    """
    Validate the trailing check digit of a complete GTIN.

    Args:
        code: Full code including check digit
        symbology: EAN13, EAN8 or UPC

    Returns:
        True if length, digits and check digit are all correct
    """
    length = GTIN_LENGTHS.get(symbology)
    if length is None:
        raise ValueError(f"{symbology.value} has no GTIN check digit")
    if len(code) != length or not code.isascii() or not code.isdigit():
        return False

    return calculate_check_digit(code[:-1]) == int(code[-1])
