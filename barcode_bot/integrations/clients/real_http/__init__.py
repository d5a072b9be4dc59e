"""
Real HTTP integration clients.

These clients talk to real external systems, currently the TEC-IT barcode
image service.

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to barcode_bot/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in barcode_bot/api/context.py only.
"""
from .tec_it_barcodes import TecItBarcodeRenderer

__all__ = ["TecItBarcodeRenderer"]
