"""
Section Segmenter Module.

Splits a multi-site document into one text segment per site code.
Strategies are tried in order:

    1. Page-break markers: the first page containing the code
    2. Recurring section headers: the span between consecutive headers
       that contains the code
    3. A fixed window around the first occurrence of the code

A document with a single code and no page markers is its own segment,
and a code that never occurs in the text maps to the whole text, so
every input code always yields exactly one segment.

Author: ML Engineering Team
"""

import re
from collections import OrderedDict
from re import Pattern
from typing import Dict, List, Optional, Sequence, Tuple, Union

from src.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

PAGE_BREAK = "\n\n--- PAGE BREAK ---\n\n"
PAGE_BREAK_PATTERN = re.compile(r'---\s*PAGE\s*BREAK\s*---', re.IGNORECASE)

# (header pattern, characters of lead-in to include before each header)
HeaderRule = Tuple[Pattern, int]


def split_pages(text: str) -> List[str]:
    """Split text on page-break markers (a text without markers is one page)."""
    return PAGE_BREAK_PATTERN.split(text or "")


def has_page_breaks(text: str) -> bool:
    return bool(text) and PAGE_BREAK_PATTERN.search(text) is not None


class SectionSegmenter:
    """
    Attributes text to site codes.

    Attributes:
        header_rules: Section header patterns with their lead-in length
        window_before: Characters kept before the code in the window fallback
        window_after: Characters kept after the code in the window fallback

    Example:
        >>> segmenter = SectionSegmenter(
        ...     header_rules=[(r'DETALII\\s+LOC\\s+DE\\s+CONSUM', 0)],
        ...     window_before=500,
        ...     window_after=2500
        ... )
        >>> segments = segmenter.segment(text, ["7001234567", "7001234568"])
        >>> len(segments)
        2
    """

    def __init__(
        self,
        header_rules: Optional[Sequence[Tuple[Union[str, Pattern], int]]] = None,
        window_before: int = 500,
        window_after: int = 2500
    ) -> None:
        self.header_rules: List[HeaderRule] = [
            (re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern, lead)
            for pattern, lead in (header_rules or [])
        ]
        self.window_before = window_before
        self.window_after = window_after

    def segment(
        self,
        text: str,
        codes: Sequence[str],
        skip_first_page: bool = False
    ) -> Dict[str, str]:
        """
        Produce one segment per code.

        Args:
            text: Whole-document text.
            codes: Distinct site codes in order of first occurrence.
            skip_first_page: Treat the first page as a shared cover sheet.

        Returns:
            Ordered mapping code -> segment text, in the order of ``codes``.
        """
        segments: Dict[str, str] = OrderedDict()

        if len(codes) == 1 and not has_page_breaks(text):
            segments[codes[0]] = text
            return segments

        for code in codes:
            if code not in segments:
                segments[code] = self.section_for(text, code, skip_first_page)

        return segments

    def section_for(self, text: str, code: str, skip_first_page: bool = False) -> str:
        """
        Locate the text belonging to one code.

        Args:
            text: Whole-document text.
            code: Site code to locate.
            skip_first_page: Search pages from the second one, falling back
                to the first page when the code is printed only there.

        Returns:
            Segment text; the whole text when the code does not occur.
        """
        if not text or code not in text:
            logger.debug(f"Code {code} not found in text, using whole document")
            return text or ""

        if has_page_breaks(text):
            page = self._page_with(text, code, skip_first_page)
            if page is not None:
                return page

        for pattern, lead in self.header_rules:
            section = self._header_section(text, code, pattern, lead)
            if section is not None:
                logger.debug(f"Code {code} located by header {pattern.pattern!r}")
                return section

        index = text.index(code)
        start = max(0, index - self.window_before)
        end = min(len(text), index + self.window_after)
        logger.debug(f"Code {code} located by window [{start}:{end}]")
        return text[start:end].strip()

    @staticmethod
    def _page_with(text: str, code: str, skip_first_page: bool) -> Optional[str]:
        pages = split_pages(text)
        start = 1 if skip_first_page and len(pages) > 1 else 0

        for page in pages[start:]:
            if code in page:
                return page.strip()

        if start and code in pages[0]:
            return pages[0].strip()
        return None

    @staticmethod
    def _header_section(text: str, code: str, pattern: Pattern, lead: int) -> Optional[str]:
        headers = list(pattern.finditer(text))

        for index, header in enumerate(headers):
            start = max(0, header.start() - lead)
            end = headers[index + 1].start() if index + 1 < len(headers) else len(text)
            section = text[start:end]
            if code in section:
                return section.strip()

        return None
