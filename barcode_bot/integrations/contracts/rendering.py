"""
Barcode rendering contract.

Defines what the bot expects from a barcode image service:
- input: the complete numeric code (treated as an opaque string)
- output: a displayable image reference the chat reply can embed

These contracts must be used by both:
- clients/mocks/barcode_images.py (static URLs for development/testing)
- clients/real_http/tec_it_barcodes.py (the public TEC-IT barcode service)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class BarcodeImage:
    data: str
    image_url: str
    alt_text: str
    symbology: str = "Code128"


class BarcodeImageRenderer(ABC):
    @abstractmethod
    def render(self, data: str) -> BarcodeImage:
        """Return an image reference for ``data``."""
