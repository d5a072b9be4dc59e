"""
Contracts (data models).

This folder defines the request/response shapes for external integrations,
currently the barcode image service.

Both mock and real HTTP clients should use these contracts.
"""
from .rendering import BarcodeImage, BarcodeImageRenderer

__all__ = ["BarcodeImage", "BarcodeImageRenderer"]
