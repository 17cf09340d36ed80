"""
Extraction Engine for the Energy Invoice Extraction System.

This module provides:
    - Invoice record data classes
    - Ordered pattern cascades
    - Supplier classification
    - Per-site section segmentation
    - Supplier-specific field extractors

The InvoiceParser orchestrating them lives in ``src.extraction.parser``.

Author: ML Engineering Team
"""

from .invoice_record import (
    InvoiceRecord,
    ConsumptionPeriod,
    BillingPeriod,
    Consumption,
    Supplier,
    RecordStatus
)
from .cascade import FieldCascade, PatternAttempt, CascadeMatch
from .classifier import SupplierClassifier, identify_supplier
from .segmenter import SectionSegmenter
from .base import SupplierExtractor
from .electrica import ElectricaExtractor
from .ppc import PPCExtractor

__all__ = [
    'InvoiceRecord',
    'ConsumptionPeriod',
    'BillingPeriod',
    'Consumption',
    'Supplier',
    'RecordStatus',
    'FieldCascade',
    'PatternAttempt',
    'CascadeMatch',
    'SupplierClassifier',
    'identify_supplier',
    'SectionSegmenter',
    'SupplierExtractor',
    'ElectricaExtractor',
    'PPCExtractor'
]
