"""
Tesseract OCR Backend.

This module provides OCR functionality using Tesseract (pytesseract).
Invoices are Romanian, so the default language pack is ``ron``; the
plain text of each page is all the extraction engine needs.

Requirements:
    - Tesseract OCR installed on the system, with the ``ron`` language
    - pytesseract Python package

Author: ML Engineering Team
"""

import time
from typing import Optional

from PIL import Image

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError

# Initialize module logger
logger = get_logger(__name__)


class TesseractBackend:
    """
    Tesseract OCR backend implementation.

    The pytesseract module and the Tesseract binary are checked on first
    use, so documents with a text layer never require Tesseract.

    Attributes:
        language: Tesseract language code (e.g., "ron")
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        extra_config: Additional Tesseract command-line options

    Example:
        >>> backend = TesseractBackend()
        >>> text = backend.extract_text(page_image)
    """

    def __init__(self, language: Optional[str] = None) -> None:
        """Initialize the Tesseract backend with configuration."""
        self.language = language or get_config("ocr.tesseract.lang", "ron")
        self.psm = get_config("ocr.tesseract.psm", 3)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.extra_config = get_config("ocr.tesseract.config", "")
        self._pytesseract = None

        logger.debug(
            f"TesseractBackend initialized (lang={self.language}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    def _check_dependencies(self) -> None:
        """
        Check if Tesseract is available.

        Raises:
            OCREngineNotAvailableError: If Tesseract is not installed.
        """
        if self._pytesseract is not None:
            return

        try:
            import pytesseract

            version = pytesseract.get_tesseract_version()
            logger.info(f"Tesseract version: {version}")
            self._pytesseract = pytesseract

        except ImportError:
            raise OCREngineNotAvailableError(
                "pytesseract (install with: pip install pytesseract)"
            )
        except Exception as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )

    def _build_config(self) -> str:
        """
        Build Tesseract configuration string.

        Returns:
            Configuration string for Tesseract.
        """
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def extract_text(self, image: Image.Image, source: str = "image") -> str:
        """
        Recognize the text of one page image.

        Args:
            image: PIL Image to process.
            source: Name used in error messages (file and page).

        Returns:
            Recognized text.

        Raises:
            OCREngineNotAvailableError: If Tesseract cannot be used.
            OCRProcessingError: If recognition fails.
        """
        self._check_dependencies()
        start_time = time.time()

        try:
            if image.mode not in ('RGB', 'L'):
                image = image.convert('RGB')

            config = self._build_config()
            logger.debug(f"Running Tesseract OCR on {source} (config: {config})")

            text = self._pytesseract.image_to_string(
                image,
                lang=self.language,
                config=config
            )

        except Exception as e:
            logger.error(f"OCR processing failed for {source}: {e}")
            raise OCRProcessingError(source, str(e))

        logger.info(
            f"OCR completed for {source}: {len(text)} chars "
            f"({time.time() - start_time:.2f}s)"
        )
        return text
