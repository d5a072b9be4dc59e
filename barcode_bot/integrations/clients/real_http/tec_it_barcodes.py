"""
TEC-IT barcode image client.

The service renders the image on request, so this client only has to build
the URL; Slack fetches the PNG when it displays the reply.
"""

from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import urlencode

from barcode_bot.integrations.contracts.rendering import BarcodeImage, BarcodeImageRenderer
from barcode_bot.utils.config_loader import RenderingConfig


class TecItBarcodeRenderer(BarcodeImageRenderer):
    def __init__(self, config: Optional[RenderingConfig] = None) -> None:
        self.config = config or RenderingConfig()

    def _params(self, data: str) -> Dict[str, str]:
        cfg = self.config
        params = {
            "data": data,
            "code": cfg.symbology,
            "multiplebarcodes": "false",
            "translate-esc": "false",
            "unit": "Fit",
            "dpi": str(cfg.dpi),
            "imagetype": "Png",
            "rotation": "0",
            "color": cfg.color,
            "bgcolor": cfg.background,
            "codepage": "",
            "qunit": "Mm",
            "quiet": str(cfg.quiet_zone),
            "eclevel": "L",
            "barwidth": str(cfg.bar_width),
            "barheight": str(cfg.bar_height),
        }
        params.update(cfg.extra_params)
        return params

    def build_url(self, data: str) -> str:
        return f"{self.config.base_url}?{urlencode(self._params(data))}"

    def render(self, data: str) -> BarcodeImage:
        return BarcodeImage(
            data=data,
            image_url=self.build_url(data),
            alt_text=f"Barcode {data}",
            symbology=self.config.symbology,
        )
