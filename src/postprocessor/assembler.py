"""
Record Assembler Module.

Combines extracted field values into an InvoiceRecord and derives its
completeness status. The status is never supplied by callers; it is
always recomputed from the other fields:

    1. Required fields missing -> INCOMPLETE with a list of names
    2. Unknown supplier -> ERROR regardless of the above
    3. Otherwise -> OK

Author: ML Engineering Team
"""

import uuid
from datetime import date
from typing import Callable, List, Optional, Tuple

from src.extraction.invoice_record import (
    InvoiceRecord,
    RecordStatus,
    Supplier,
    NOT_AVAILABLE
)
from src.utils.logger import get_logger
from .normalizers import clean_text, round_money, round_quantity

# Initialize module logger
logger = get_logger(__name__)

INCOMPLETE_PREFIX = "incomplete data: "
UNKNOWN_SUPPLIER = "unknown supplier"


def _default_id() -> str:
    return uuid.uuid4().hex


class RecordAssembler:
    """
    Builds immutable InvoiceRecord values.

    Id generation and the processing-date clock are injected so that
    assembly is deterministic under test.

    Attributes:
        id_factory: Callable returning a fresh record id
        clock: Callable returning today's date

    Example:
        >>> assembler = RecordAssembler(id_factory=lambda: "rec-1")
        >>> record = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA)
        >>> record.status
        <RecordStatus.INCOMPLETE: 'INCOMPLETE'>
    """

    def __init__(
        self,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], date]] = None
    ) -> None:
        self.id_factory = id_factory or _default_id
        self.clock = clock or date.today

    def assemble(
        self,
        file_name: str,
        supplier: Supplier,
        invoice_number: str = "",
        issue_date: str = "",
        client_name: str = "",
        site_name: str = "",
        site_code: str = "",
        meter_point_code: str = "",
        address: str = "",
        start_date: str = "",
        end_date: str = "",
        quantity: float = 0,
        source_label: str = "",
        total_payment: float = 0.0,
        document_link: str = ""
    ) -> InvoiceRecord:
        """
        Assemble one record and classify it.

        Never raises: a record whose every field is empty is returned as
        INCOMPLETE (or ERROR for an unknown supplier) with the full list
        of missing fields in its observations.

        Args:
            file_name: Source document name.
            supplier: Supplier tag from the classifier.
            quantity: Consumption in kWh, rounded half-up to an integer.
            source_label: Phrase the quantity was read from; "" becomes "N/A".
            total_payment: Amount due, rounded half-up to 2 decimals.

        Returns:
            InvoiceRecord with status and observations filled in.
        """
        if start_date and end_date and start_date > end_date:
            logger.warning(
                f"{file_name}: inverted period {start_date}..{end_date}, swapping"
            )
            start_date, end_date = end_date, start_date

        consumption = max(round_quantity(quantity), 0)
        total = max(round_money(total_payment), 0.0)

        missing = self.missing_fields(
            invoice_number, issue_date, site_code, start_date, end_date, total
        )
        status, observations = self.classify(supplier, missing)

        return InvoiceRecord(
            id=self.id_factory(),
            file_name=file_name,
            supplier=supplier,
            invoice_number=clean_text(invoice_number),
            issue_date=issue_date or "",
            client_name=clean_text(client_name),
            site_name=clean_text(site_name),
            site_code=site_code or "",
            meter_point_code=meter_point_code or "",
            address=clean_text(address),
            start_date=start_date or "",
            end_date=end_date or "",
            consumption_kwh=consumption,
            source_label=source_label or NOT_AVAILABLE,
            total_payment=total,
            processing_date=self.clock().isoformat(),
            status=status,
            observations=observations,
            document_link=document_link or ""
        )

    @staticmethod
    def missing_fields(
        invoice_number: str,
        issue_date: str,
        site_code: str,
        start_date: str,
        end_date: str,
        total_payment: float
    ) -> List[str]:
        """Names of the required fields that are absent, in a fixed order."""
        missing = []
        if not invoice_number:
            missing.append("invoice number")
        if not issue_date:
            missing.append("issue date")
        if not site_code:
            missing.append("site code")
        if not (start_date and end_date):
            missing.append("billing period")
        if not total_payment:
            missing.append("total payment")
        return missing

    @staticmethod
    def classify(supplier: Supplier, missing: List[str]) -> Tuple[RecordStatus, str]:
        """
        Apply the status rule.

        Returns:
            (RecordStatus, observations) tuple.
        """
        reasons = list(missing)
        status = RecordStatus.INCOMPLETE if reasons else RecordStatus.OK

        if supplier == Supplier.UNKNOWN:
            status = RecordStatus.ERROR
            reasons.insert(0, UNKNOWN_SUPPLIER)

        observations = INCOMPLETE_PREFIX + ", ".join(reasons) if reasons else ""
        return status, observations

    def error_record(
        self,
        file_name: str,
        reason: str,
        document_link: str = ""
    ) -> InvoiceRecord:
        """
        Build the ERROR record that stands in for an unreadable document.

        Args:
            file_name: Source document name.
            reason: Failure description, stored verbatim as observations.
            document_link: Path of the source document when known.
        """
        return InvoiceRecord(
            id=self.id_factory(),
            file_name=file_name,
            supplier=Supplier.UNKNOWN,
            invoice_number="",
            issue_date="",
            client_name="",
            site_name="",
            site_code="",
            meter_point_code="",
            address="",
            start_date="",
            end_date="",
            consumption_kwh=0,
            source_label=NOT_AVAILABLE,
            total_payment=0.0,
            processing_date=self.clock().isoformat(),
            status=RecordStatus.ERROR,
            observations=reason,
            document_link=document_link or ""
        )
