from barcode_bot.integrations.contracts.rendering import BarcodeImage, BarcodeImageRenderer


class StaticBarcodeRenderer(BarcodeImageRenderer):
    """Returns predictable URLs without calling any image service."""

    def __init__(self, base_url: str = "https://barcodes.example.invalid"):
        self.base_url = base_url.rstrip("/")
        self.rendered = []

    def render(self, data: str) -> BarcodeImage:
        self.rendered.append(data)
        return BarcodeImage(
            data=data,
            image_url=f"{self.base_url}/{data}.png",
            alt_text=f"Barcode {data}",
        )
