"""
Supplier Extractor Interface.

Every supplier family implements the same capability set over a text
segment. Document-level fields (invoice number, issue date, client,
total, billing period) are read from the whole document; site-level
fields (site name, meter point, address, consumption) are read from the
segment the SectionSegmenter attributed to one site code.

Extractors never raise for missing data: absent text fields are "",
absent numbers are 0 and absent periods are empty.

Author: ML Engineering Team
"""

from abc import ABC, abstractmethod
from re import Match
from typing import List

from src.postprocessor.normalizers import normalize_date, normalize_number
from .invoice_record import BillingPeriod, Consumption, ConsumptionPeriod
from .generic import extract_generic_client_name
from .segmenter import SectionSegmenter


def date_transform(match: Match) -> str:
    """Transform the first three capture groups into an ISO date."""
    return normalize_date(match.groups()[:3])


def period_transform(match: Match) -> BillingPeriod:
    """Transform six capture groups (two day/month/year triples) into a period."""
    groups = match.groups()
    return BillingPeriod(
        start_date=normalize_date(groups[0:3]),
        end_date=normalize_date(groups[3:6])
    )


def number_transform(match: Match) -> float:
    """Transform the first capture group with the Romanian number rules."""
    return normalize_number(match.group(1))


def complete_period(period: BillingPeriod) -> bool:
    return isinstance(period, BillingPeriod) and period.is_complete


class SupplierExtractor(ABC):
    """
    Capability interface of a supplier family.

    Class Attributes:
        supports_multiple_periods: Sites may yield several consumption periods
        skips_cover_page: The first page is a shared cover sheet when the
            document lists more than one site

    Attributes:
        segmenter: SectionSegmenter configured for this family's layout
    """

    name = "base"
    supports_multiple_periods = False
    skips_cover_page = False

    def __init__(self) -> None:
        self.segmenter = self.build_segmenter()

    def build_segmenter(self) -> SectionSegmenter:
        """Create the segmenter for this family's section headers."""
        return SectionSegmenter()

    # Document-level fields

    @abstractmethod
    def extract_invoice_number(self, text: str) -> str:
        """Invoice series and number as printed."""

    @abstractmethod
    def extract_issue_date(self, text: str) -> str:
        """ISO issue date or ""."""

    def extract_client_name(self, text: str) -> str:
        """Billed client name; the generic cascade unless overridden."""
        return extract_generic_client_name(text)

    @abstractmethod
    def extract_total_payment(self, text: str) -> float:
        """Amount due in lei, 0.0 when not found."""

    @abstractmethod
    def extract_billing_period(self, text: str) -> BillingPeriod:
        """Billing window of the whole invoice."""

    # Site-level fields

    @abstractmethod
    def extract_site_codes(self, text: str) -> List[str]:
        """Distinct site codes in order of first occurrence."""

    def extract_site_code(self, text: str) -> str:
        """The first site code of ``text``, or ""."""
        codes = self.extract_site_codes(text)
        return codes[0] if codes else ""

    @abstractmethod
    def extract_site_name(self, text: str) -> str:
        """Name of the consumption location."""

    @abstractmethod
    def extract_meter_point_code(self, text: str) -> str:
        """POD code of the site."""

    @abstractmethod
    def extract_address(self, text: str, site_scoped: bool = True) -> str:
        """
        Site address.

        Args:
            text: Segment (or whole document) text.
            site_scoped: False when ``text`` is a whole document without
                site codes, where site address labels are unreliable.
        """

    @abstractmethod
    def extract_consumption(self, text: str) -> Consumption:
        """Single consumption value of a segment."""

    def extract_consumption_periods(self, text: str) -> List[ConsumptionPeriod]:
        """Consumption sub-periods of a segment (none unless overridden)."""
        return []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
