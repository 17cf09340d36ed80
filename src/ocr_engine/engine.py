"""
Main OCR Engine Module.

This module provides the OCREngine class, the unified interface the
input handler uses to turn page images into text.

Usage:
    from src.ocr_engine import OCREngine

    engine = OCREngine()
    pages = engine.extract_pages(images, source="factura.pdf")

Author: ML Engineering Team
"""

from pathlib import Path
from typing import List, Optional, Union

from PIL import Image

from src.utils.logger import get_logger
from src.utils.exceptions import OCRProcessingError
from .tesseract_backend import TesseractBackend

# Initialize module logger
logger = get_logger(__name__)


class OCREngine:
    """
    OCR engine providing a text-only interface over Tesseract.

    Attributes:
        backend: Object with an ``extract_text(image, source)`` method;
                 a TesseractBackend unless one is injected

    Example:
        >>> engine = OCREngine()
        >>> text = engine.extract_text("scan.png")
    """

    def __init__(self, backend: Optional[TesseractBackend] = None) -> None:
        self.backend = backend or TesseractBackend()
        logger.debug(f"OCR Engine initialized with {type(self.backend).__name__}")

    def extract_text(
        self,
        image: Union[Image.Image, str, Path],
        source: Optional[str] = None
    ) -> str:
        """
        Extract the text of one image.

        Args:
            image: PIL Image or path to image file.
            source: Name used in log and error messages.

        Returns:
            Recognized text.

        Raises:
            OCRProcessingError: If the image cannot be loaded or recognized.
        """
        if isinstance(image, (str, Path)):
            image_path = str(image)
            source = source or Path(image_path).name
            try:
                image = Image.open(image_path)
            except Exception as e:
                raise OCRProcessingError(image_path, f"Failed to load image: {e}")

        if not isinstance(image, Image.Image):
            raise OCRProcessingError(source or "unknown", "Invalid image input")

        return self.backend.extract_text(image, source=source or "image")

    def extract_pages(
        self,
        images: List[Image.Image],
        source: str = "document"
    ) -> List[str]:
        """
        Extract the text of every page image, in page order.

        Args:
            images: Rendered pages.
            source: Document name used in log and error messages.

        Returns:
            One text per page.
        """
        pages = []
        for index, image in enumerate(images, 1):
            logger.debug(f"Running OCR on page {index}/{len(images)} of {source}")
            pages.append(self.extract_text(image, source=f"{source} page {index}"))
        return pages
