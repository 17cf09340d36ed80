"""
OCR Engine Module for the Energy Invoice Extraction System.

This module provides OCR functionality for image-based documents:
    - Text extraction from page images
    - Romanian language recognition by default

Supported backends:
    - Tesseract (pytesseract)

Author: ML Engineering Team
"""

from .engine import OCREngine
from .tesseract_backend import TesseractBackend

__all__ = ['OCREngine', 'TesseractBackend']
