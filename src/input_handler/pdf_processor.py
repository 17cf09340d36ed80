"""
PDF Processor Module.

This module handles PDF file processing including:
    - Text layer extraction, one string per page (pdfplumber)
    - Page rendering for OCR when the text layer is empty
    - PDF metadata extraction

Rendering uses PyMuPDF when installed and falls back to pdf2image
(Poppler). pdfplumber keeps the line structure of each page, which the
line-anchored supplier patterns rely on.

Author: ML Engineering Team
"""

import io
from pathlib import Path
from typing import Any, Dict, List, Union

from PIL import Image

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import CorruptedFileError, InputError, TextAcquisitionError

# Initialize module logger
logger = get_logger(__name__)


class PDFProcessor:
    """
    Processor for PDF files.

    Handles both digital PDFs (with a text layer) and scanned PDFs
    (image-only). The handler decides which path to take from the
    amount of text found.

    Attributes:
        dpi: Resolution used when rendering pages for OCR
        max_pages: Maximum number of pages to process

    Example:
        >>> processor = PDFProcessor()
        >>> pages = processor.extract_text_pages("factura.pdf")
        >>> print(f"Read {len(pages)} pages")
    """

    def __init__(self) -> None:
        """Initialize the PDF processor with configuration."""
        self.dpi = get_config("input.pdf.ocr_dpi", 216)
        self.max_pages = get_config("input.pdf.max_pages", 50)

        self._check_dependencies()

        logger.debug(f"PDFProcessor initialized (DPI={self.dpi}, max_pages={self.max_pages})")

    def _check_dependencies(self) -> None:
        """Look up the optional PDF libraries once."""
        try:
            import pdfplumber
            self._pdfplumber = pdfplumber
        except ImportError:
            logger.warning("pdfplumber not available. Install with: pip install pdfplumber")
            self._pdfplumber = None

        try:
            import fitz  # PyMuPDF
            self._pymupdf = fitz
        except ImportError:
            logger.debug("PyMuPDF not available. Using pdf2image for rendering.")
            self._pymupdf = None

        try:
            import pdf2image
            self._pdf2image = pdf2image
        except ImportError:
            logger.debug("pdf2image not available.")
            self._pdf2image = None

    def extract_text_pages(self, filepath: Union[str, Path]) -> List[str]:
        """
        Read the text layer of a PDF.

        Args:
            filepath: Path to the PDF file.

        Returns:
            One string per page ("" for pages without text).

        Raises:
            TextAcquisitionError: If pdfplumber is missing.
            CorruptedFileError: If the PDF cannot be opened.
        """
        filepath = Path(filepath)
        if self._pdfplumber is None:
            raise TextAcquisitionError(str(filepath), "pdfplumber is not installed")

        try:
            with self._pdfplumber.open(filepath) as pdf:
                pages = pdf.pages
                if len(pages) > self.max_pages:
                    logger.warning(
                        f"PDF has {len(pages)} pages, limiting to {self.max_pages}"
                    )
                    pages = pages[:self.max_pages]
                texts = [page.extract_text() or "" for page in pages]

        except Exception as e:
            logger.error(f"Failed to read text layer of {filepath.name}: {e}")
            raise CorruptedFileError(str(filepath), str(e))

        logger.debug(f"Read text layer of {filepath.name}: {len(texts)} page(s)")
        return texts

    def render_pages(self, filepath: Union[str, Path]) -> List[Image.Image]:
        """
        Render PDF pages to images for OCR.

        Args:
            filepath: Path to the PDF file.

        Returns:
            List of RGB PIL Images, one per page.

        Raises:
            InputError: If no rendering library is available.
            CorruptedFileError: If rendering fails.
        """
        filepath = Path(filepath)

        if self._pymupdf is not None:
            images = self._render_with_pymupdf(filepath)
        elif self._pdf2image is not None:
            images = self._render_with_pdf2image(filepath)
        else:
            raise InputError(
                "No PDF rendering library available. "
                "Install PyMuPDF or pdf2image."
            )

        logger.info(f"Rendered {len(images)} page(s) of {filepath.name} at {self.dpi} DPI")
        return images

    def _render_with_pymupdf(self, filepath: Path) -> List[Image.Image]:
        logger.debug("Using PyMuPDF for PDF rendering")
        images = []

        try:
            with self._pymupdf.open(filepath) as doc:
                # PDF user space is 72 DPI
                zoom = self.dpi / 72.0
                matrix = self._pymupdf.Matrix(zoom, zoom)

                for page_num in range(min(len(doc), self.max_pages)):
                    pix = doc.load_page(page_num).get_pixmap(matrix=matrix)
                    image = Image.open(io.BytesIO(pix.tobytes("png")))
                    images.append(image.convert('RGB') if image.mode != 'RGB' else image)

        except Exception as e:
            logger.error(f"PyMuPDF rendering failed: {e}")
            raise CorruptedFileError(str(filepath), str(e))

        return images

    def _render_with_pdf2image(self, filepath: Path) -> List[Image.Image]:
        logger.debug("Using pdf2image for PDF rendering")

        try:
            images = self._pdf2image.convert_from_path(
                filepath,
                dpi=self.dpi,
                first_page=1,
                last_page=self.max_pages,
                fmt='png'
            )
        except Exception as e:
            logger.error(f"pdf2image rendering failed: {e}")
            raise CorruptedFileError(str(filepath), str(e))

        return [img.convert('RGB') if img.mode != 'RGB' else img for img in images]

    def extract_metadata(self, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Collect file and document metadata.

        Args:
            filepath: Path to the PDF file.

        Returns:
            Dictionary of metadata. Document properties are included
            only when PyMuPDF can read them.
        """
        filepath = Path(filepath)
        metadata = {
            'original_filename': filepath.name,
            'file_size_bytes': filepath.stat().st_size,
            'file_type': 'pdf'
        }

        if self._pymupdf is not None:
            try:
                with self._pymupdf.open(filepath) as doc:
                    pdf_metadata = doc.metadata or {}
                    metadata['pdf_title'] = pdf_metadata.get('title', '')
                    metadata['pdf_producer'] = pdf_metadata.get('producer', '')
                    metadata['pdf_creation_date'] = pdf_metadata.get('creationDate', '')
                    metadata['total_pages'] = len(doc)
            except Exception as e:
                logger.debug(f"Could not extract PDF metadata: {e}")

        return metadata
