"""
Generic Client Name Cascade.

Shared fallback used by every supplier family when its own client
cascade finds nothing. Candidate names must be upper-case, at least five
characters long and must not be one of the tariff or table words that
follow the CLIENT label on many layouts (CASNIC, PIATA, FACTURA ...).

Author: ML Engineering Team
"""

import re
from re import Match
from typing import Iterable

from src.postprocessor.normalizers import clean_text
from src.postprocessor.validators import Validator, all_of, excludes, matches, min_length
from .cascade import FieldCascade, PatternAttempt

CLIENT_EXCLUSIONS = [
    r'(NON)?CASNIC$',
    r'PIATA',
    r'FACTURA',
    r'PLATA',
    r'ANTERIOR',
    r'CURENT',
    r'CONCURENTIAL',
    r'NONCASNIC',
]


def client_transform(match: Match) -> str:
    return clean_text(match.group(1))


def client_name_validator(extra_exclusions: Iterable[str] = ()) -> Validator:
    """Upper-case name of 5+ characters outside the exclusion list."""
    exclusions = '|'.join(list(CLIENT_EXCLUSIONS) + list(extra_exclusions))
    return all_of(
        min_length(5),
        excludes(rf'(?:{exclusions})'),
        matches(r'[A-Z\s.\-]+')
    )


_valid_client = client_name_validator()

GENERIC_CLIENT_CASCADE = FieldCascade(
    "client_name",
    [
        PatternAttempt(
            r'CLIENT\s+([A-Z][A-Z\s.\-]+?)\s+(?:Adresa|Cod|CUI|CIF)',
            client_transform, _valid_client, flags=re.IGNORECASE
        ),
        PatternAttempt(
            r'CLIENT\s+([A-Z][A-Z\s.\-]{3,50})',
            client_transform, _valid_client, flags=re.IGNORECASE
        ),
        PatternAttempt(
            r'(?:consumator|beneficiar)[\s:]*([A-Z][A-Z\s.\-]+)',
            client_transform, _valid_client, flags=re.IGNORECASE
        ),
        PatternAttempt(
            r'(?:nume|denumire)[\s:]*([A-Z][A-Z\s.\-]+)',
            client_transform, _valid_client, flags=re.IGNORECASE
        ),
    ],
    scan_all=True
)


def extract_generic_client_name(text: str) -> str:
    """Run the generic client cascade over ``text``."""
    return GENERIC_CLIENT_CASCADE.extract(text)
