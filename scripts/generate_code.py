#!/usr/bin/env python3
"""
Generate a barcode number offline, without Slack.

  python scripts/generate_code.py 1234567890123 100
  python scripts/generate_code.py 1234567890123 100 --url
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from barcode_bot.barcodes import generate_code  # noqa: E402
from barcode_bot.chatbot.reply_cards import format_price_gbp  # noqa: E402
from barcode_bot.chatbot.validation import ValidationError  # noqa: E402
from barcode_bot.integrations.clients.real_http.tec_it_barcodes import TecItBarcodeRenderer  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a price-embedded barcode number")
    parser.add_argument("product_code", help="Product barcode (8-14 digits, separators allowed)")
    parser.add_argument("price", type=int, help="Price in pence (1-99999)")
    parser.add_argument("--url", action="store_true", help="Also print the barcode image URL")
    args = parser.parse_args()

    try:
        code = generate_code(args.product_code, args.price)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    print(f"Barcode: {code.digits}")
    print(f"Price:   {format_price_gbp(code.price_in_pence)}")
    print(f"Check:   {code.check_digit}")
    if args.url:
        print(f"Image:   {TecItBarcodeRenderer().build_url(code.digits)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
