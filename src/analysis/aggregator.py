"""
Record Aggregation Module.

Reduces a batch of InvoiceRecords into the views used by the report:

    - MonthlyAnalysis: kWh per site code and month, with the yearly
      total and the monthly average
    - ProcessingSummary: record counts by status

Only OK records with an end date take part in the monthly analysis;
the month of a record is the ``YYYY-MM`` of its end date.

Author: ML Engineering Team
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional

from src.utils.logger import get_logger
from src.extraction.invoice_record import InvoiceRecord, RecordStatus
from src.postprocessor.normalizers import round_quantity

# Initialize module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class MonthlyAnalysis:
    """
    Monthly consumption of one site.

    Attributes:
        site_code: NLC / ELECTEL code the rows were grouped by
        site_name: Site name of the first record seen for the code
        monthly_data: ``YYYY-MM`` -> kWh, in first-seen order
        total_year: Sum of all months
        monthly_average: total_year / number of months, rounded half-up
    """
    site_code: str
    site_name: str
    monthly_data: Dict[str, int] = field(default_factory=dict)
    total_year: int = 0
    monthly_average: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'site_code': self.site_code,
            'site_name': self.site_name,
            'monthly_data': dict(self.monthly_data),
            'total_year': self.total_year,
            'monthly_average': self.monthly_average
        }


@dataclass(frozen=True)
class ProcessingSummary:
    """Record counts of a batch by status."""
    total_files: int
    successful_files: int
    incomplete_files: int
    error_files: int
    processing_date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_files': self.total_files,
            'successful_files': self.successful_files,
            'incomplete_files': self.incomplete_files,
            'error_files': self.error_files,
            'processing_date': self.processing_date
        }


def generate_monthly_analysis(records: Iterable[InvoiceRecord]) -> List[MonthlyAnalysis]:
    """
    Group OK records by site code, then by month, summing kWh.

    Args:
        records: Records of one or more documents.

    Returns:
        One MonthlyAnalysis per site code, in first-seen order.

    Example:
        >>> analysis = generate_monthly_analysis(records)
        >>> analysis[0].monthly_data
        {'2025-01': 1250}
    """
    sites = OrderedDict()

    for record in records:
        if not record.is_ok or not record.end_date:
            continue

        entry = sites.setdefault(
            record.site_code,
            {'site_name': record.site_name, 'months': OrderedDict()}
        )
        months = entry['months']
        months[record.month] = months.get(record.month, 0) + record.consumption_kwh

    analysis = []
    for site_code, entry in sites.items():
        months = entry['months']
        total = sum(months.values())
        average = round_quantity(total / len(months)) if months else 0
        analysis.append(MonthlyAnalysis(
            site_code=site_code,
            site_name=entry['site_name'],
            monthly_data=dict(months),
            total_year=total,
            monthly_average=average
        ))

    logger.debug(f"Monthly analysis built for {len(analysis)} site(s)")
    return analysis


def generate_processing_summary(
    records: Iterable[InvoiceRecord],
    clock: Optional[Callable[[], date]] = None
) -> ProcessingSummary:
    """
    Count records by status.

    Args:
        records: Records of a batch.
        clock: Returns today's date; injectable for tests.

    Returns:
        ProcessingSummary dated with the clock.
    """
    records = list(records)
    today = (clock or date.today)()

    return ProcessingSummary(
        total_files=len(records),
        successful_files=sum(1 for r in records if r.is_ok),
        incomplete_files=sum(1 for r in records if r.status == RecordStatus.INCOMPLETE),
        error_files=sum(1 for r in records if r.status == RecordStatus.ERROR),
        processing_date=today.isoformat()
    )
