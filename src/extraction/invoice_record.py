"""
Invoice Record Data Classes.

This module defines the records produced by the extraction engine:

    InvoiceRecord: one row per site and consumption sub-period
    ConsumptionPeriod: one sub-period found inside a site section
    BillingPeriod / Consumption: single-value extractor results
    Supplier / RecordStatus: closed enumerations

Records are immutable; derived views (aggregations, exports) build new
values instead of mutating them.

Author: ML Engineering Team
"""

import json
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict


class Supplier(str, Enum):
    """Canonical supplier tags recognized by the classifier."""

    PPC = "PPC ENERGIE"
    ELECTRICA = "ELECTRICA"
    PREMIER = "PREMIER ENERGY"
    CEZ = "CEZ VÂNZARE"
    ENEL = "ENEL ENERGIE"
    EON = "E.ON"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class RecordStatus(str, Enum):
    """Completeness classification of a record."""

    OK = "OK"
    INCOMPLETE = "INCOMPLETE"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class BillingPeriod:
    """Start and end of a billing window as ISO strings ("" when unknown)."""

    start_date: str = ""
    end_date: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.start_date and self.end_date)


@dataclass(frozen=True)
class Consumption:
    """A single consumption value and the label of the phrase it came from."""

    quantity: int = 0
    source_label: str = ""


@dataclass(frozen=True)
class ConsumptionPeriod:
    """
    One measured quantity tied to a date sub-range of a site section.

    Attributes:
        start_date: ISO start of the sub-period
        end_date: ISO end of the sub-period
        quantity: Measured kWh for the sub-period
        source_label: Table row label the quantity was read from
    """

    start_date: str
    end_date: str
    quantity: int
    source_label: str


@dataclass(frozen=True)
class InvoiceRecord:
    """
    One row of billing data for one site and one sub-period of a document.

    ``status`` and ``observations`` are computed by the RecordAssembler
    from the other fields; build records through it rather than directly.

    Attributes:
        id: Generated unique identifier
        file_name: Source document name (shared by all its records)
        supplier: Supplier tag
        invoice_number: Invoice series/number as printed
        issue_date: ISO issue date or ""
        client_name: Billed client
        site_name: Consumption location name
        site_code: NLC / ELECTEL location code
        meter_point_code: POD code
        address: Site (or client) address
        start_date: ISO start of the billing window or ""
        end_date: ISO end of the billing window or ""
        consumption_kwh: Rounded kWh; 0 with source_label "N/A" means not found
        source_label: Phrase the consumption was read from, or "N/A"
        total_payment: Amount due in RON, 2 decimals; 0 means not found
        processing_date: ISO date the record was assembled
        status: OK, INCOMPLETE or ERROR
        observations: Explanation of missing data
        document_link: Path of the source document when known

    Example:
        >>> record.to_dict()["site_code"]
        '7001234567'
    """

    id: str
    file_name: str
    supplier: Supplier
    invoice_number: str
    issue_date: str
    client_name: str
    site_name: str
    site_code: str
    meter_point_code: str
    address: str
    start_date: str
    end_date: str
    consumption_kwh: int
    source_label: str
    total_payment: float
    processing_date: str
    status: RecordStatus
    observations: str
    document_link: str = ""

    @property
    def month(self) -> str:
        """``YYYY-MM`` of the end date, the aggregation key ("" when unknown)."""
        return self.end_date[:7] if self.end_date else ""

    @property
    def is_ok(self) -> bool:
        return self.status == RecordStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary with enum values flattened to strings.

        Returns:
            Dictionary in field declaration order.
        """
        data = asdict(self)
        data['supplier'] = str(self.supplier)
        data['status'] = str(self.status)
        return data

    def to_json(self, indent: int = 2) -> str:
        """Convert to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InvoiceRecord':
        """
        Rebuild a record from ``to_dict`` output.

        Unknown keys are ignored; missing text fields default to "".
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for name in known:
            values.setdefault(name, "")
        values['supplier'] = Supplier(values.get('supplier') or Supplier.UNKNOWN.value)
        values['status'] = RecordStatus(values.get('status') or RecordStatus.ERROR.value)
        values['consumption_kwh'] = int(values.get('consumption_kwh') or 0)
        values['total_payment'] = float(values.get('total_payment') or 0.0)
        return cls(**values)

    def __repr__(self) -> str:
        return (
            f"InvoiceRecord("
            f"file={self.file_name}, "
            f"site={self.site_code or '-'}, "
            f"period={self.start_date or '?'}..{self.end_date or '?'}, "
            f"kwh={self.consumption_kwh}, "
            f"status={self.status})"
        )
