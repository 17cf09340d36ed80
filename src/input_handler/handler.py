"""
Main Input Handler Module.

This module provides the InputHandler class that turns an invoice file
into the linear text stream consumed by the extraction engine. Pages
are followed by a page-break marker so that the segmenter can reason
about page boundaries.

Usage:
    from src.input_handler import InputHandler

    handler = InputHandler()
    result = handler.load("factura.pdf")
    if result.success:
        records = parser.parse(result.text, result.filename)

Classes:
    InputResult: Outcome of loading one file
    InputHandler: Main class for file input handling
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import get_file_extension
from src.utils.exceptions import (
    InputError,
    InvoiceExtractionError,
    UnsupportedFileTypeError,
    FileNotFoundError,
    CorruptedFileError
)
from src.extraction.segmenter import PAGE_BREAK, PAGE_BREAK_PATTERN

from .pdf_processor import PDFProcessor
from .image_processor import ImageProcessor


# Initialize module logger
logger = get_logger(__name__)


@dataclass
class InputResult:
    """
    Data class representing the result of loading one file.

    Attributes:
        filepath: Original file path
        filename: Original filename
        file_type: Detected file type ('pdf', 'image' or 'text')
        text: Document text with page-break markers
        page_count: Number of pages read
        used_ocr: Whether the text came from OCR
        metadata: Additional file metadata
        success: Whether loading was successful
        error: Error message if loading failed
    """
    filepath: str
    filename: str
    file_type: str
    text: str = ""
    page_count: int = 0
    used_ocr: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"InputResult(filename='{self.filename}', "
            f"type='{self.file_type}', "
            f"pages={self.page_count}, "
            f"ocr={self.used_ocr}, "
            f"success={self.success})"
        )


class InputHandler:
    """
    Main input handler for invoice files.

    Digital PDFs are read from their text layer. PDFs whose text layer
    holds no more than ``min_text_chars`` characters, and image files,
    go through OCR. Plain ``.txt`` files are read as UTF-8.

    Attributes:
        supported_extensions: Set of supported file extensions
        min_text_chars: Text layer size at or below which a PDF is OCR'd
        pdf_processor: PDFProcessor instance for PDF files
        image_processor: ImageProcessor instance for image files

    Example:
        >>> handler = InputHandler()
        >>> result = handler.load("factura.pdf")
        >>> print(f"Loaded {result.page_count} pages (OCR: {result.used_ocr})")
    """

    PDF_EXTENSIONS = {'.pdf'}
    IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.tiff', '.tif', '.bmp'}
    TEXT_EXTENSIONS = {'.txt'}

    def __init__(self, ocr_engine=None) -> None:
        """
        Initialize the InputHandler.

        Args:
            ocr_engine: Object with an ``extract_pages(images, source)``
                method. Created on first use when omitted, so text-layer
                PDFs never need Tesseract.
        """
        self.supported_extensions = {
            ext.lower() for ext in get_config(
                "input.supported_extensions",
                list(self.PDF_EXTENSIONS | self.IMAGE_EXTENSIONS | self.TEXT_EXTENSIONS)
            )
        }
        self.min_text_chars = get_config("input.pdf.min_text_chars", 100)

        self.pdf_processor = PDFProcessor()
        self.image_processor = ImageProcessor()
        self._ocr_engine = ocr_engine

        logger.info(f"InputHandler initialized with extensions: {sorted(self.supported_extensions)}")

    @property
    def ocr_engine(self):
        if self._ocr_engine is None:
            from src.ocr_engine import OCREngine
            self._ocr_engine = OCREngine()
        return self._ocr_engine

    @staticmethod
    def join_pages(pages: List[str]) -> str:
        """Concatenate page texts, each followed by the page-break marker."""
        return "".join(page + PAGE_BREAK for page in pages)

    @staticmethod
    def text_length(text: str) -> int:
        """Count non-whitespace characters outside page-break markers."""
        return len(re.sub(r'\s+', '', PAGE_BREAK_PATTERN.sub('', text or '')))

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """
        Detect the type of input file.

        Returns:
            File type string: 'pdf', 'image' or 'text'.

        Raises:
            UnsupportedFileTypeError: If file type is not supported.
        """
        extension = get_file_extension(filepath)

        if extension in self.PDF_EXTENSIONS:
            return 'pdf'
        elif extension in self.IMAGE_EXTENSIONS:
            return 'image'
        elif extension in self.TEXT_EXTENSIONS:
            return 'text'
        raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists and is accessible.

        Returns:
            Path object pointing to the validated file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            UnsupportedFileTypeError: If file type is not supported.
            CorruptedFileError: If file is empty.
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(str(filepath))

        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        extension = get_file_extension(filepath)
        if extension not in self.supported_extensions:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

        if path.stat().st_size == 0:
            raise CorruptedFileError(str(filepath), "File is empty")

        logger.debug(f"File validated: {filepath}")
        return path

    def load(self, filepath: Union[str, Path]) -> InputResult:
        """
        Load an invoice file as text.

        Never raises: every failure is reported through
        ``InputResult.success`` and ``InputResult.error``.

        Args:
            filepath: Path to the invoice file.

        Returns:
            InputResult with the document text and metadata.

        Example:
            >>> result = handler.load("factura.pdf")
            >>> if not result.success:
            ...     print(result.error)
        """
        filepath = str(filepath)
        logger.info(f"Loading file: {filepath}")

        try:
            path = self.validate_file(filepath)
            file_type = self.detect_file_type(path)

            if file_type == 'pdf':
                result = self._load_pdf(path)
            elif file_type == 'image':
                result = self._load_image(path)
            else:
                result = self._load_text(path)

            logger.info(
                f"Successfully loaded: {path.name} ({result.page_count} page(s), "
                f"{self.text_length(result.text)} chars, OCR={result.used_ocr})"
            )
            return result

        except InvoiceExtractionError as e:
            logger.error(f"Input error for {filepath}: {e}")
            return self._failure(filepath, str(e))

        except Exception as e:
            logger.exception(f"Unexpected error loading {filepath}: {e}")
            return self._failure(filepath, f"Unexpected error: {e}")

    def _load_pdf(self, path: Path) -> InputResult:
        pages = self.pdf_processor.extract_text_pages(path)
        metadata = self.pdf_processor.extract_metadata(path)
        text = self.join_pages(pages)
        used_ocr = False

        if self.text_length(text) <= self.min_text_chars:
            logger.info(f"{path.name} has no usable text layer, running OCR")
            images = [self.image_processor.prepare(image)
                      for image in self.pdf_processor.render_pages(path)]
            pages = self.ocr_engine.extract_pages(images, source=path.name)
            text = self.join_pages(pages)
            used_ocr = True

        metadata['page_count'] = len(pages)
        return InputResult(
            filepath=str(path),
            filename=path.name,
            file_type='pdf',
            text=text,
            page_count=len(pages),
            used_ocr=used_ocr,
            metadata=metadata
        )

    def _load_image(self, path: Path) -> InputResult:
        images, metadata = self.image_processor.process(path)
        pages = self.ocr_engine.extract_pages(images, source=path.name)
        return InputResult(
            filepath=str(path),
            filename=path.name,
            file_type='image',
            text=self.join_pages(pages),
            page_count=len(pages),
            used_ocr=True,
            metadata=metadata
        )

    def _load_text(self, path: Path) -> InputResult:
        try:
            text = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise CorruptedFileError(str(path), f"Not valid UTF-8: {e}")

        return InputResult(
            filepath=str(path),
            filename=path.name,
            file_type='text',
            text=text,
            page_count=len(PAGE_BREAK_PATTERN.findall(text)) or 1,
            metadata={
                'original_filename': path.name,
                'file_size_bytes': path.stat().st_size,
                'file_type': 'text'
            }
        )

    @staticmethod
    def _failure(filepath: str, error: str) -> InputResult:
        return InputResult(
            filepath=filepath,
            filename=Path(filepath).name,
            file_type='unknown',
            success=False,
            error=error
        )
