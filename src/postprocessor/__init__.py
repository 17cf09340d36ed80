"""
Post-Processing Module for the Energy Invoice Extraction System.

This module provides functionality for:
    - Romanian number and date normalization
    - Half-up rounding of quantities and money
    - Plausibility validators used by extraction cascades
    - Record assembly and completeness classification

Author: ML Engineering Team
"""

from .normalizers import (
    normalize_number,
    normalize_date,
    round_half_up,
    round_quantity,
    round_money,
    clean_text,
    is_number
)
from .validators import (
    accept_any,
    min_length,
    matches,
    excludes,
    not_containing,
    numeric_range,
    all_of
)
from .assembler import RecordAssembler

__all__ = [
    'normalize_number',
    'normalize_date',
    'round_half_up',
    'round_quantity',
    'round_money',
    'clean_text',
    'is_number',
    'accept_any',
    'min_length',
    'matches',
    'excludes',
    'not_containing',
    'numeric_range',
    'all_of',
    'RecordAssembler'
]
