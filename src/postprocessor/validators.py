"""
Plausibility Validators Module.

Each extraction cascade pairs a pattern with a validator: a captured
value only wins when its validator accepts it. Validators here are small
composable predicates built by factory functions:

    - min_length: minimum text length
    - matches: full-match against a character-class pattern
    - excludes: reject values matching a deny-list pattern
    - not_containing: reject values holding a forbidden fragment
    - numeric_range: accept finite numbers inside a range
    - all_of: combine several validators

Author: ML Engineering Team
"""

import re
from re import Pattern
from typing import Any, Callable, Optional, Union

from .normalizers import is_number

Validator = Callable[[Any], bool]


def accept_any(value: Any) -> bool:
    """Accept every non-empty value."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def min_length(length: int) -> Validator:
    """Accept strings with at least ``length`` characters after stripping."""
    def validate(value: Any) -> bool:
        return isinstance(value, str) and len(value.strip()) >= length
    return validate


def matches(pattern: Union[str, Pattern], flags: int = 0) -> Validator:
    """
    Accept strings that fully match ``pattern``.

    Example:
        >>> digits = matches(r'[0-9]+')
        >>> digits("7001234567")
        True
    """
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

    def validate(value: Any) -> bool:
        return isinstance(value, str) and compiled.fullmatch(value.strip()) is not None
    return validate


def excludes(pattern: Union[str, Pattern], flags: int = re.IGNORECASE) -> Validator:
    """Reject strings where ``pattern`` matches at the start."""
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

    def validate(value: Any) -> bool:
        return isinstance(value, str) and compiled.match(value.strip()) is None
    return validate


def not_containing(*fragments: str) -> Validator:
    """Reject strings containing any of the given fragments."""
    def validate(value: Any) -> bool:
        return isinstance(value, str) and not any(f in value for f in fragments)
    return validate


def numeric_range(
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    exclusive_max: bool = True
) -> Validator:
    """
    Accept finite numbers within ``[minimum, maximum)``.

    NaN (an unparseable number) is always rejected so that the cascade
    moves on to the next pattern.
    """
    def validate(value: Any) -> bool:
        if not is_number(value):
            return False
        if minimum is not None and value < minimum:
            return False
        if maximum is not None:
            if exclusive_max and value >= maximum:
                return False
            if not exclusive_max and value > maximum:
                return False
        return True
    return validate


def all_of(*validators: Validator) -> Validator:
    """Accept a value only when every validator accepts it."""
    def validate(value: Any) -> bool:
        return all(check(value) for check in validators)
    return validate
