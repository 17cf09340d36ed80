"""
Image Processor Module.

Prepares scanned pages for Tesseract:
    - Image loading and validation (multi-frame TIFF included)
    - EXIF orientation correction
    - Grayscale conversion with alpha flattened onto white
    - Optional contrast enhancement

Supports: JPG, JPEG, PNG, TIFF, BMP

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from PIL import Image, ImageEnhance, ImageOps, ImageSequence

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import CorruptedFileError

# Initialize module logger
logger = get_logger(__name__)


class ImageProcessor:
    """
    Processor for image files and rendered PDF pages.

    Attributes:
        auto_orient: Whether to auto-correct orientation from EXIF
        grayscale: Whether to convert pages to grayscale
        enhance_contrast: Whether to apply contrast enhancement
        max_pages: Maximum frames read from a multi-page image

    Example:
        >>> processor = ImageProcessor()
        >>> pages, metadata = processor.process("factura_scan.tiff")
        >>> len(pages)
        2
    """

    def __init__(self) -> None:
        """Initialize the image processor with configuration."""
        self.auto_orient = get_config("input.image.auto_orient", True)
        self.grayscale = get_config("input.image.grayscale", True)
        self.enhance_contrast = get_config("input.image.enhance_contrast", False)
        self.max_pages = get_config("input.pdf.max_pages", 50)

        logger.debug(
            f"ImageProcessor initialized (orient={self.auto_orient}, "
            f"grayscale={self.grayscale}, contrast={self.enhance_contrast})"
        )

    def process(self, filepath: Union[str, Path]) -> Tuple[List[Image.Image], Dict[str, Any]]:
        """
        Load an image file as a list of OCR-ready pages.

        Args:
            filepath: Path to the image file.

        Returns:
            Tuple of (list of PIL Images, metadata dictionary).

        Raises:
            CorruptedFileError: If image cannot be read.
        """
        filepath = Path(filepath)
        logger.info(f"Processing image: {filepath.name}")

        try:
            with Image.open(filepath) as image:
                metadata = {
                    'original_filename': filepath.name,
                    'file_size_bytes': filepath.stat().st_size,
                    'file_type': 'image',
                    'format': image.format,
                    'original_width': image.width,
                    'original_height': image.height
                }
                pages = [
                    self.prepare(frame.copy())
                    for frame in ImageSequence.Iterator(image)
                ][:self.max_pages]

        except Exception as e:
            logger.error(f"Failed to process image {filepath}: {e}")
            raise CorruptedFileError(str(filepath), str(e))

        metadata['page_count'] = len(pages)
        return pages, metadata

    def prepare(self, image: Image.Image) -> Image.Image:
        """
        Apply the OCR preparation pipeline to one page.

        Processing steps:
            1. Fix orientation from EXIF
            2. Flatten transparency onto white
            3. Convert to grayscale (optional)
            4. Enhance contrast (optional)

        Args:
            image: Input PIL Image.

        Returns:
            Processed PIL Image.
        """
        if self.auto_orient:
            image = ImageOps.exif_transpose(image)

        image = self._flatten(image)

        if self.grayscale:
            image = image.convert('L')

        if self.enhance_contrast:
            image = ImageEnhance.Contrast(image).enhance(1.2)
            logger.debug("Applied contrast enhancement")

        return image

    @staticmethod
    def _flatten(image: Image.Image) -> Image.Image:
        if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
            image = image.convert('RGBA')
            background = Image.new('RGB', image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[3])
            return background

        if image.mode not in ('RGB', 'L'):
            return image.convert('RGB')
        return image
