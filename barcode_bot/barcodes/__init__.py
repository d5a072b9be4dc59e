"""
Barcode number generation (pure, no I/O).
"""
from .check_digit import calculate_check_digit, is_valid_check_digit, weighted_sum
from .generator import GeneratedCode, build_payload, generate_code, normalize_price, normalize_product_code

__all__ = [
    "GeneratedCode",
    "build_payload",
    "calculate_check_digit",
    "generate_code",
    "is_valid_check_digit",
    "normalize_price",
    "normalize_product_code",
    "weighted_sum",
]
