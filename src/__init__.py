"""
Energy Invoice Extraction System - Source Package.

This package contains all modules of the invoice extraction system.
Each module has a single responsibility.

Modules:
    - input_handler: PDF, image and text input; text layer and page rendering
    - ocr_engine: Tesseract text recognition for scanned pages
    - extraction: Supplier classification, segmentation and field extraction
    - postprocessor: Normalization, plausibility checks and record assembly
    - analysis: Monthly consumption per site and processing summary
    - output_handler: Excel and JSON output
    - pipeline: Per-document and concurrent batch processing

Architecture:
    Input → (OCR) → Extraction → Record Assembly → Analysis → Output
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'input_handler',
    'ocr_engine',
    'extraction',
    'postprocessor',
    'analysis',
    'output_handler',
    'pipeline',
    'utils'
]
