"""
Price-embedded barcode numbers.

A code is built from a product identifier and a price in pence:

    "91" + product (13 digits) + price (6 digits) + check digit

Everything here is pure: no I/O, no shared state, safe to call from any number
of request handlers at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from barcode_bot.barcodes.check_digit import calculate_check_digit
from barcode_bot.chatbot.validation import digits_only, fail

logger = logging.getLogger(__name__)

PREFIX = "91"
PRODUCT_WIDTH = 13
PRICE_WIDTH = 6
BASE_WIDTH = len(PREFIX) + PRODUCT_WIDTH + PRICE_WIDTH  # 21
CODE_WIDTH = BASE_WIDTH + 1  # 22

MIN_PRODUCT_DIGITS = 8
# A 14-digit identifier (GTIN-14) carries its own, now stale, check digit.
GTIN14_WIDTH = 14
MIN_PRICE = 1
MAX_PRICE = 99999


@dataclass(frozen=True)
class GeneratedCode:
    """A complete code plus the price it encodes (in pence)."""

    digits: str
    price_in_pence: int

    @property
    def base(self) -> str:
        return self.digits[:BASE_WIDTH]

    @property
    def check_digit(self) -> int:
        return int(self.digits[-1])

    @property
    def product_field(self) -> str:
        start = len(PREFIX)
        return self.digits[start : start + PRODUCT_WIDTH]

    @property
    def price_field(self) -> str:
        start = len(PREFIX) + PRODUCT_WIDTH
        return self.digits[start : start + PRICE_WIDTH]

    def __str__(self) -> str:
        return self.digits


def normalize_product_code(raw_product_id: str) -> str:
    """
    Reduce a raw product identifier to the 13-digit product field.

    Non-digits are stripped, a GTIN-14 loses its trailing check digit, and the
    rest is left-padded with zeros. Identifiers that would still be wider than
    the field are rejected rather than silently widened or truncated.
    """
    product = digits_only(raw_product_id)
    if len(product) < MIN_PRODUCT_DIGITS:
        fail("product_code", f"Barcode must be at least {MIN_PRODUCT_DIGITS} digits long")
    if len(product) == GTIN14_WIDTH:
        product = product[:-1]
    if len(product) > PRODUCT_WIDTH:
        fail("product_code", f"Barcode must be at most {GTIN14_WIDTH} digits long")
    return product.zfill(PRODUCT_WIDTH)


def normalize_price(price_in_pence: int) -> str:
    if isinstance(price_in_pence, bool) or not isinstance(price_in_pence, int):
        fail("price", "Price must be a whole number of pence")
    if price_in_pence < MIN_PRICE or price_in_pence > MAX_PRICE:
        fail("price", "Price must be between 1p and £999.99")
    return str(price_in_pence).zfill(PRICE_WIDTH)


def build_payload(raw_product_id: str, price_in_pence: int) -> str:
    """Return the 21-digit base the check digit is computed over."""
    product = normalize_product_code(raw_product_id)
    price = normalize_price(price_in_pence)
    return f"{PREFIX}{product}{price}"


def generate_code(raw_product_id: str, price_in_pence: int) -> GeneratedCode:
    """
    Normalize, checksum and assemble a code.

    Raises:
        ValidationError: on the first input that breaks a precondition.
    """
    base = build_payload(raw_product_id, price_in_pence)
    digits = f"{base}{calculate_check_digit(base)}"
    logger.debug("Generated code %s for price=%s", digits, price_in_pence)
    return GeneratedCode(digits=digits, price_in_pence=price_in_pence)
