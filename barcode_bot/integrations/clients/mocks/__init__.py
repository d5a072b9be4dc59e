"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- the bot runs offline during development
- we want to test command handling end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to barcode_bot/integrations/contracts/*
"""
from .barcode_images import StaticBarcodeRenderer

__all__ = ["StaticBarcodeRenderer"]
