"""
Weighted modulo-10 check digits (the EAN/UPC family).
"""

from __future__ import annotations

from barcode_bot.chatbot.validation import ValidationError


def _require_digits(value: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(message="Check digit input must be a non-empty digit string")
    if not value.isascii() or not value.isdigit():
        raise ValidationError(message=f"Check digit input must contain digits only: {value!r}")
    return value


def weighted_sum(digits: str, *, check_digit_included: bool = False) -> int:
    """
    Sum of digit * weight, walking from the rightmost digit.

    For a bare payload, offsets 0, 2, 4, ... from the right carry weight 3 and
    the others weight 1. When ``digits`` already ends with its check digit the
    pattern shifts by one, so the check digit itself has weight 1.
    """
    digits = _require_digits(digits)
    heavy = 1 if check_digit_included else 0
    total = 0
    for offset, ch in enumerate(reversed(digits)):
        weight = 3 if offset % 2 == heavy else 1
        total += int(ch) * weight
    return total


def calculate_check_digit(base: str) -> int:
    """Return the digit that makes the weighted sum of ``base + digit`` a multiple of 10."""
    return (10 - weighted_sum(base) % 10) % 10


def is_valid_check_digit(code: str) -> bool:
    """True when the last digit of ``code`` is the check digit of everything before it."""
    code = _require_digits(code)
    if len(code) < 2:
        return False
    return weighted_sum(code, check_digit_included=True) % 10 == 0
