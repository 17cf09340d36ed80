"""
Input Handler Module for the Energy Invoice Extraction System.

This module provides functionality for:
    - Detecting file types (PDF, image, plain text)
    - Loading and validating input files
    - Reading the PDF text layer page by page
    - Rendering and preparing pages for OCR when no text layer exists

Supported formats:
    - PDF (digital and scanned)
    - Images: JPG, JPEG, PNG, TIFF, BMP
    - Plain text (UTF-8)

Author: ML Engineering Team
"""

from .handler import InputHandler, InputResult
from .pdf_processor import PDFProcessor
from .image_processor import ImageProcessor

__all__ = ['InputHandler', 'InputResult', 'PDFProcessor', 'ImageProcessor']
