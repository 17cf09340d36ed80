"""
Invoice Parser Module.

Orchestrates the extraction engine for one document:

    classify supplier -> select extractor -> find site codes
    -> segment per code -> extract site fields -> assemble records

A document yields one record per site code, or one record per
consumption period when the supplier family splits consumption by
period. A document without site codes yields exactly one record built
from the whole text.

The parser keeps no per-document state and is safe to call from
several threads at once.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from src.postprocessor.assembler import RecordAssembler
from src.utils.logger import get_logger
from .base import SupplierExtractor
from .classifier import SupplierClassifier
from .electrica import ElectricaExtractor
from .invoice_record import BillingPeriod, InvoiceRecord, Supplier
from .ppc import PPCExtractor

# Initialize module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentFields:
    """Fields shared by every record of one document."""

    supplier: Supplier
    invoice_number: str
    issue_date: str
    client_name: str
    total_payment: float
    billing_period: BillingPeriod


def default_registry() -> Dict[Supplier, SupplierExtractor]:
    """Suppliers with a dedicated extractor; all others use the default."""
    return {
        Supplier.PPC: PPCExtractor(),
        Supplier.ELECTRICA: ElectricaExtractor(),
    }


class InvoiceParser:
    """
    Turns whole-document text into InvoiceRecord values.

    Attributes:
        classifier: SupplierClassifier used to pick the extractor
        registry: Supplier -> extractor mapping
        default_extractor: Extractor for suppliers missing from the registry
        assembler: RecordAssembler building and classifying records

    Example:
        >>> parser = InvoiceParser()
        >>> records = parser.parse(text, "factura_ian.pdf")
        >>> [r.status for r in records]
        [<RecordStatus.OK: 'OK'>, <RecordStatus.OK: 'OK'>]
    """

    def __init__(
        self,
        assembler: Optional[RecordAssembler] = None,
        classifier: Optional[SupplierClassifier] = None,
        registry: Optional[Dict[Supplier, SupplierExtractor]] = None,
        default_extractor: Optional[SupplierExtractor] = None
    ) -> None:
        self.assembler = assembler or RecordAssembler()
        self.classifier = classifier or SupplierClassifier()
        self.registry = registry if registry is not None else default_registry()
        self.default_extractor = default_extractor or ElectricaExtractor()

    def register(self, supplier: Supplier, extractor: SupplierExtractor) -> None:
        """Route documents of ``supplier`` to ``extractor``."""
        self.registry[supplier] = extractor
        logger.debug(f"Registered {extractor!r} for {supplier}")

    def extractor_for(self, supplier: Supplier) -> SupplierExtractor:
        return self.registry.get(supplier, self.default_extractor)

    def parse(
        self,
        document_text: Optional[str],
        file_name: str,
        document_link: str = ""
    ) -> List[InvoiceRecord]:
        """
        Parse one document.

        Never raises for malformed text: an unexpected internal failure is
        logged and reported as a single ERROR record.

        Args:
            document_text: Whole-document text, pages separated by
                page-break markers.
            file_name: Source document name copied into every record.
            document_link: Source path copied into every record.

        Returns:
            Records in site-code order, periods in the order found.
        """
        try:
            return self._parse(document_text or "", file_name, document_link)
        except Exception as e:
            logger.exception(f"Unexpected failure parsing {file_name}")
            return [self.assembler.error_record(
                file_name,
                f"parse failure: {e}",
                document_link=document_link
            )]

    def _parse(self, text: str, file_name: str, document_link: str) -> List[InvoiceRecord]:
        supplier = self.classifier.classify(text)
        extractor = self.extractor_for(supplier)
        logger.info(f"Parsing {file_name} as {supplier} with {extractor.name} extractor")

        document = DocumentFields(
            supplier=supplier,
            invoice_number=extractor.extract_invoice_number(text),
            issue_date=extractor.extract_issue_date(text),
            client_name=extractor.extract_client_name(text),
            total_payment=extractor.extract_total_payment(text),
            billing_period=extractor.extract_billing_period(text)
        )
        logger.debug(f"Document fields for {file_name}: {document}")

        codes = extractor.extract_site_codes(text)
        if not codes:
            logger.info(f"{file_name}: no site codes found, building a single record")
            return [self._whole_document_record(text, extractor, document, file_name, document_link)]

        skip_first_page = extractor.skips_cover_page and len(codes) > 1
        segments = extractor.segmenter.segment(text, codes, skip_first_page)

        records: List[InvoiceRecord] = []
        for code, segment in segments.items():
            records.extend(self._site_records(
                code, segment, extractor, document, file_name, document_link
            ))

        logger.info(f"{file_name}: {len(codes)} site(s), {len(records)} record(s)")
        return records

    def _whole_document_record(
        self,
        text: str,
        extractor: SupplierExtractor,
        document: DocumentFields,
        file_name: str,
        document_link: str
    ) -> InvoiceRecord:
        consumption = extractor.extract_consumption(text)
        return self._assemble(
            document, file_name, document_link,
            site_name=extractor.extract_site_name(text),
            site_code=extractor.extract_site_code(text),
            meter_point_code=extractor.extract_meter_point_code(text),
            address=extractor.extract_address(text, site_scoped=False),
            start_date=document.billing_period.start_date,
            end_date=document.billing_period.end_date,
            quantity=consumption.quantity,
            source_label=consumption.source_label
        )

    def _site_records(
        self,
        code: str,
        segment: str,
        extractor: SupplierExtractor,
        document: DocumentFields,
        file_name: str,
        document_link: str
    ) -> List[InvoiceRecord]:
        site = dict(
            site_name=extractor.extract_site_name(segment),
            site_code=code,
            meter_point_code=extractor.extract_meter_point_code(segment),
            address=extractor.extract_address(segment)
        )

        periods = (
            extractor.extract_consumption_periods(segment)
            if extractor.supports_multiple_periods else []
        )
        if periods:
            return [
                self._assemble(
                    document, file_name, document_link,
                    start_date=period.start_date,
                    end_date=period.end_date,
                    quantity=period.quantity,
                    source_label=period.source_label,
                    **site
                )
                for period in periods
            ]

        consumption = extractor.extract_consumption(segment)
        return [self._assemble(
            document, file_name, document_link,
            start_date=document.billing_period.start_date,
            end_date=document.billing_period.end_date,
            quantity=consumption.quantity,
            source_label=consumption.source_label,
            **site
        )]

    def _assemble(
        self,
        document: DocumentFields,
        file_name: str,
        document_link: str,
        **site_fields
    ) -> InvoiceRecord:
        return self.assembler.assemble(
            file_name=file_name,
            supplier=document.supplier,
            invoice_number=document.invoice_number,
            issue_date=document.issue_date,
            client_name=document.client_name,
            total_payment=document.total_payment,
            document_link=document_link,
            **site_fields
        )


_default_parser: Optional[InvoiceParser] = None


def parse_invoice_text(text: str, file_name: str) -> List[InvoiceRecord]:
    """
    Parse ``text`` with a shared default parser.

    Example:
        >>> records = parse_invoice_text(text, "factura.pdf")
    """
    global _default_parser
    if _default_parser is None:
        _default_parser = InvoiceParser()
    return _default_parser.parse(text, file_name)
