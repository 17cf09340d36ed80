"""
Supplier Classifier Module.

Identifies the issuing supplier from identifying tokens in the raw
document text. Token sets are tested in a fixed order against the
upper-cased text and the first set with a hit wins, because some tokens
also appear in the context of other suppliers' documents (a PPC invoice
may mention the regional distributor, for instance).

Author: ML Engineering Team
"""

import re
from typing import List, Optional, Sequence, Tuple

from src.utils.logger import get_logger
from .invoice_record import Supplier

# Initialize module logger
logger = get_logger(__name__)


# (supplier, token patterns) in priority order; patterns run on upper-cased text
DEFAULT_TOKENS: List[Tuple[Supplier, Sequence[str]]] = [
    (Supplier.PPC, [r'PPC ENERGIE', r'COD ELECTEL', r'MYPPC']),
    (Supplier.ELECTRICA, [r'E-DISTRIBUTIE', r'E-DISTRIBUȚIE', r'EDISTRIBUTIE', r'ELECTRICA']),
    (Supplier.PREMIER, [r'PREMIER ENERGY', r'PREMIER']),
    (Supplier.CEZ, [r'\bCEZ\b', r'\bC\.E\.Z\b']),
    (Supplier.ENEL, [r'\bENEL\b']),
    (Supplier.EON, [r'\bE\.ON\b', r'\bEON\b']),
]


class SupplierClassifier:
    """
    Ordered token matcher returning a Supplier tag.

    Classification is total and deterministic: any string (including
    an empty one) maps to exactly one tag, ``Supplier.UNKNOWN`` when no
    token set matches.

    Example:
        >>> SupplierClassifier().classify("Furnizor: PPC Energie S.A.")
        <Supplier.PPC: 'PPC ENERGIE'>
    """

    def __init__(
        self,
        tokens: Optional[List[Tuple[Supplier, Sequence[str]]]] = None
    ) -> None:
        self._rules = [
            (supplier, [re.compile(pattern) for pattern in patterns])
            for supplier, patterns in (tokens or DEFAULT_TOKENS)
        ]

    def classify(self, text: Optional[str]) -> Supplier:
        """
        Return the supplier of a document.

        Args:
            text: Whole-document text.

        Returns:
            The first matching Supplier, or Supplier.UNKNOWN.
        """
        if not text:
            return Supplier.UNKNOWN

        upper = text.upper()
        for supplier, patterns in self._rules:
            if any(pattern.search(upper) for pattern in patterns):
                logger.debug(f"Supplier identified: {supplier}")
                return supplier

        logger.debug("No supplier token found")
        return Supplier.UNKNOWN


_default_classifier = SupplierClassifier()


def identify_supplier(text: Optional[str]) -> Supplier:
    """Classify ``text`` with the default token sets."""
    return _default_classifier.classify(text)
