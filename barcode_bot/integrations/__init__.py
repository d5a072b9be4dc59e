"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- Slack (user group lookups, deferred slash-command replies)
- Barcode image services (TEC-IT or a static mock)

Key rule:
- Command handlers MUST NOT call external APIs directly.
- Handlers should call integration clients (under barcode_bot/integrations/clients).
- We use MOCK clients during development and tests, REAL_HTTP clients in production.

Switching implementations:
- The selection of mock vs real clients should happen in ONE place (barcode_bot/api/context.py).
"""

from .contracts.rendering import BarcodeImage, BarcodeImageRenderer

__all__ = ["BarcodeImage", "BarcodeImageRenderer"]
