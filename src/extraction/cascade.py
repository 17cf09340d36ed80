"""
Pattern Cascade Module.

A field is extracted by an ordered list of pattern attempts. Attempts
are evaluated lazily, in order; the first match whose transformed value
passes the attempt's validator wins. Keeping the cascades as data makes
supplier tuning a matter of editing lists rather than control flow.

Example:
    >>> cascade = FieldCascade("invoice_number", [
    ...     PatternAttempt(r'factura\\s+nr\\.?\\s*([A-Z0-9\\-/]{5,})', flags=re.I),
    ... ])
    >>> cascade.extract("Factura nr. EF12345")
    'EF12345'

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass
from re import Match, Pattern
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, Union

from src.postprocessor.validators import Validator, accept_any
from src.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

Transform = Callable[[Match], Any]


def first_group(match: Match) -> str:
    """Default transform: the stripped first capture group."""
    return (match.group(1) or '').strip()


class PatternAttempt:
    """
    One (pattern, validator) pair of a cascade.

    Attributes:
        pattern: Compiled regular expression
        transform: Turns a match into a candidate value
        validator: Decides whether the candidate is plausible
        label: Name reported with the value (e.g. the source phrase)
    """

    def __init__(
        self,
        pattern: Union[str, Pattern],
        transform: Transform = first_group,
        validator: Validator = accept_any,
        label: str = "",
        flags: int = 0
    ) -> None:
        self.pattern = re.compile(pattern, flags) if isinstance(pattern, str) else pattern
        self.transform = transform
        self.validator = validator
        self.label = label

    def candidates(self, text: str, scan_all: bool = False) -> Iterator[Tuple[Match, Any]]:
        """Yield (match, value) pairs for the first match, or every match."""
        if scan_all:
            matches: Iterable[Match] = self.pattern.finditer(text)
        else:
            found = self.pattern.search(text)
            matches = [found] if found else []

        for match in matches:
            yield match, self.transform(match)

    def __repr__(self) -> str:
        return f"PatternAttempt({self.pattern.pattern!r}, label={self.label!r})"


@dataclass(frozen=True)
class CascadeMatch:
    """The winning value of a cascade and where it came from."""

    value: Any
    label: str
    attempt_index: int
    start: int


class FieldCascade:
    """
    Ordered list of pattern attempts for one field.

    Attributes:
        name: Field name used in debug logging
        attempts: Pattern attempts in priority order
        scan_all: Test every match of an attempt instead of only the first

    Example:
        >>> cascade.first_match(text)
        CascadeMatch(value='EF12345', label='', attempt_index=0, start=8)
    """

    def __init__(
        self,
        name: str,
        attempts: List[PatternAttempt],
        scan_all: bool = False
    ) -> None:
        self.name = name
        self.attempts = list(attempts)
        self.scan_all = scan_all

    def first_match(self, text: str) -> Optional[CascadeMatch]:
        """
        Run the cascade and return the first validator-accepted value.

        Args:
            text: Text to search.

        Returns:
            CascadeMatch, or None when no attempt produced a plausible value.
        """
        if not text:
            return None

        for index, attempt in enumerate(self.attempts):
            for match, value in attempt.candidates(text, self.scan_all):
                if attempt.validator(value):
                    logger.debug(
                        f"{self.name}: attempt {index} matched {value!r}"
                    )
                    return CascadeMatch(
                        value=value,
                        label=attempt.label,
                        attempt_index=index,
                        start=match.start()
                    )
                logger.debug(f"{self.name}: attempt {index} rejected {value!r}")

        return None

    def extract(self, text: str, default: Any = "") -> Any:
        """Return the winning value, or ``default`` when nothing matched."""
        result = self.first_match(text)
        return result.value if result else default

    def find_all(self, text: str) -> List[CascadeMatch]:
        """
        Collect every accepted match of every attempt.

        Results are ordered by position in the text, so values can be
        deduplicated by first occurrence regardless of which attempt
        found them.
        """
        found: List[CascadeMatch] = []
        if not text:
            return found

        for index, attempt in enumerate(self.attempts):
            for match, value in attempt.candidates(text, scan_all=True):
                if attempt.validator(value):
                    found.append(CascadeMatch(
                        value=value,
                        label=attempt.label,
                        attempt_index=index,
                        start=match.start(1) if match.lastindex else match.start()
                    ))

        found.sort(key=lambda item: (item.start, item.attempt_index))
        return found

    def __len__(self) -> int:
        return len(self.attempts)
