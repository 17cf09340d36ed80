"""
PPC Energie Extractor.

PPC invoices list one page per consumption location:

    CAMIN
    Adresă loc consum: Strada BANIA, nr. 129, ...
    Cod ELECTEL: 541393231, POD: RO005E541393231
    Energie activă 17.10.24-16.01.25 kWh 1 26222/cit 26222/estimat 0 0 0
    Energie activă 17.01.25-31.01.25 kWh 1 26222/estimat 26270/cit 48 0 48

Each "Energie activă" row of the main consumption table becomes one
consumption period. The regulatory breakdown table further down the page
("cf. OUG 27/2022", numbered rows) repeats the phrase with per-component
detail and is skipped.

Author: ML Engineering Team
"""

import re
from re import Match
from typing import List, Optional

from config import get_config
from src.postprocessor.normalizers import (
    clean_text,
    is_number,
    normalize_date,
    normalize_number,
    round_money,
    round_quantity
)
from src.postprocessor.validators import (
    accept_any,
    all_of,
    excludes,
    min_length,
    not_containing,
    numeric_range
)
from src.utils.logger import get_logger
from .base import (
    SupplierExtractor,
    complete_period,
    date_transform,
    number_transform,
    period_transform
)
from .cascade import FieldCascade, PatternAttempt
from .generic import client_name_validator, client_transform, extract_generic_client_name
from .invoice_record import BillingPeriod, Consumption, ConsumptionPeriod
from .segmenter import SectionSegmenter

# Initialize module logger
logger = get_logger(__name__)

CONSUMPTION_LABEL = "Energie activă"
FALLBACK_CONSUMPTION_LABEL = "Consum energie activă"

_UPPER = r'A-ZĂÂÎȘȚŞŢ'
_RANGE = r'(\d{1,2})\.(\d{1,2})\.(\d{4})\s*[\-–]\s*(\d{1,2})\.(\d{1,2})\.(\d{4})'


def _series_number(match: Match) -> str:
    return f"{match.group(1)} {match.group(2)}"


INVOICE_NUMBER = FieldCascade("invoice_number", [
    PatternAttempt(r'seria\s+([A-Z0-9]+)\s+nr\s+([0-9]+)', _series_number, flags=re.I),
])

ISSUE_DATE = FieldCascade("issue_date", [
    PatternAttempt(r'din\s+data\s+de\s+(\d{1,2})\.(\d{1,2})\.(\d{4})', date_transform, flags=re.I),
    PatternAttempt(r'data\s+facturii[\s:]+(\d{1,2})\.(\d{1,2})\.(\d{4})', date_transform, flags=re.I),
])

_ppc_client = client_name_validator([r'FURNIZOR', r'DISTRIBUITOR'])
_CLIENT_EXCLUDED = excludes(
    r'(?:(NON)?CASNIC$|PIATA|FACTURA|PLATA|ANTERIOR|CURENT|CONCURENTIAL|FURNIZOR|DISTRIBUITOR)'
)

CLIENT_NAME = FieldCascade("client_name", [
    PatternAttempt(
        r'CLIENT\s+([A-Z][A-Z\s.\-]+?)\s+(?:Adresa|Adres[aă]|Cod|CUI|CIF)',
        client_transform, _ppc_client, flags=re.I
    ),
    PatternAttempt(r'CLIENT\s+([A-Z][A-Z\s.\-]{3,50})', client_transform, _ppc_client, flags=re.I),
    PatternAttempt(r'(COMUNA\s+[A-Z]+)', client_transform, _ppc_client, flags=re.I),
    PatternAttempt(r'(PRIMARIA\s+[A-Z]+)', client_transform, _ppc_client, flags=re.I),
    PatternAttempt(
        r'Adres[aă]\s+de\s+coresponden[tț][aă]\s*[\n\r]+\s*([A-Z][A-Z\s.\-]{3,50})',
        client_transform, _ppc_client, flags=re.I
    ),
], scan_all=True)

# name printed just before the correspondence address block
CLIENT_BEFORE_CORRESPONDENCE = FieldCascade("client_name", [
    PatternAttempt(
        r'([A-Z][A-Z\s.\-]{5,50})\s*[\n\r]+\s*Adres[aă]\s+de\s+coresponden',
        client_transform, _CLIENT_EXCLUDED, flags=re.I
    ),
])

SITE_CODES = FieldCascade("electel_code", [
    PatternAttempt(r'Cod\s+ELECTEL[\s:,]+(\d{9})', flags=re.I),
    PatternAttempt(r'POD[\s:,]+RO\d{3}E(\d{9})', flags=re.I),
])

METER_POINT = FieldCascade("pod_code", [
    PatternAttempt(r'POD[\s:]+([A-Z0-9]{15,25})', flags=re.I),
    PatternAttempt(r'(RO[0-9]{3}E[0-9]{9,15})', flags=re.I),
])

_REF_SUFFIX = re.compile(r'-\d+.*$')


def _location_name(match: Match) -> str:
    return _REF_SUFFIX.sub('', match.group(1).strip()).strip()


def _site_name_validator(*prefixes: str):
    """Names of 3+ characters that are not a field label."""
    label = excludes(r'(?:' + '|'.join(prefixes) + r')') if prefixes else accept_any
    return all_of(min_length(3), not_containing('ELECTEL', 'POD'), label)


SITE_NAME = FieldCascade("site_name", [
    PatternAttempt(
        rf'^([{_UPPER}][{_UPPER}0-9 .\-]{{2,60}}?)(?:-\d+[/\d.]*)?\s+Adres[aă]\s+loc\s+consum',
        _location_name, _site_name_validator(r'Cod\s'), flags=re.M
    ),
    PatternAttempt(
        rf'^([{_UPPER}][{_UPPER}0-9 .\-]{{2,60}}?)[ \t]*[\r\n]',
        _location_name,
        _site_name_validator(r'Adres', r'Cod\s', r'Nivel', r'Oferta', r'Pagina', r'Interval', r'Specificat'),
        flags=re.M
    ),
    PatternAttempt(
        rf'^([{_UPPER}][{_UPPER}0-9 ]{{3,60}})-\d+',
        _location_name, _site_name_validator(r'Adres'), flags=re.M
    ),
    PatternAttempt(
        rf'^([{_UPPER}][{_UPPER}0-9 .\-]{{2,60}}?)\s+(?:Adres|Cod\s+ELECTEL)',
        _location_name, _site_name_validator(), flags=re.M
    ),
])

_POSTAL_CODE = re.compile(r',?\s*cod\s*po[sș]tal\s*\d*', re.I)
_TRAILING_COMMA = re.compile(r',\s*$')
_TRAILING_ZIP = re.compile(r'\s+\d{6}$')
_ONLY_DIGITS = re.compile(r'^\d+$')
_CODE_LIKE = re.compile(r'^[A-Z]{2,3}\d')


def _clean_address(match: Match) -> str:
    address = _POSTAL_CODE.sub('', match.group(1).strip()).strip()
    address = _TRAILING_COMMA.sub('', address).strip()
    return _TRAILING_ZIP.sub('', address).strip()


def _plausible_address(value) -> bool:
    return (
        isinstance(value, str)
        and len(value) > 10
        and not _ONLY_DIGITS.match(value)
        and not _CODE_LIKE.match(value)
    )


ADDRESS = FieldCascade("address", [
    PatternAttempt(r'Adres[aă]\s+loc\s+consum\s*:\s*([^\n]{10,200})', _clean_address, _plausible_address, flags=re.I),
    PatternAttempt(
        r'Adres[aă]\s+loc\s+consum\s+((?:Strada|Str\.|Calea|Bd\.|Bulevardul|Aleea|Pia[tț]a)[^\n]{10,200})',
        _clean_address, _plausible_address, flags=re.I
    ),
    PatternAttempt(r'Adres[aă]\s+loc\s+consum\s+([A-Z][^\n]{10,200})', _clean_address, _plausible_address, flags=re.I),
    PatternAttempt(r'Adres[aă]\s+sediu\s+social\s*:\s*([^\n]{10,200})', _clean_address, _plausible_address, flags=re.I),
    PatternAttempt(
        r'Adres[aă]\s+de\s+coresponden[tț][aă]\s*:\s*([^\n]{10,200})',
        _clean_address, _plausible_address, flags=re.I
    ),
])

_plausible_kwh = numeric_range(0, 10_000_000)
_plausible_total = numeric_range(0)
_MONEY = r'(-?\d{1,3}(?:\.\d{3})*,\d{2})'

TOTAL_PAYMENT = FieldCascade("total_payment", [
    PatternAttempt(
        r'Total\s+de\s+plat[aă]\s*(?:\([^)]*\))?[^\d\-]{0,80}?' + _MONEY + r'\s*lei',
        number_transform, _plausible_total, flags=re.I
    ),
    PatternAttempt(
        r'Total\s+de\s+plat[aă]\s+\([^)]+\)[\s\S]{0,200}?(-?\d+(?:\.\d{3})*[.,]\d{2})',
        number_transform, _plausible_total, flags=re.I
    ),
    PatternAttempt(
        r'6\.\s*Total\s+de\s+plat[aă][\s\S]{0,200}?(-?\d+(?:\.\d{3})*[.,]\d{2})',
        number_transform, _plausible_total, flags=re.I
    ),
    PatternAttempt(r'Total\s+de\s+plat[aă][^\d\-]{0,80}(-?[0-9.,]+)\s*lei', number_transform, _plausible_total, flags=re.I),
])

BILLING_PERIOD = FieldCascade("billing_period", [
    PatternAttempt(r'Perioad[aă]\s+facturare[\s:]*' + _RANGE, period_transform, complete_period, flags=re.I),
    PatternAttempt(r'Perioad[aă]\s+de\s+facturare[\s:]*' + _RANGE, period_transform, complete_period, flags=re.I),
])

CONSUMPTION = FieldCascade("consumption", [
    PatternAttempt(
        r'Consum\s+energie\s+activ[aă][^\n]*?(\d+)',
        number_transform, _plausible_kwh, FALLBACK_CONSUMPTION_LABEL, re.I
    ),
    PatternAttempt(
        r'Total\s+energie[\s\S]*?(-?[0-9.,]+)\s*kWh',
        number_transform, _plausible_kwh, FALLBACK_CONSUMPTION_LABEL, re.I
    ),
])

# Energie activă DD.MM.YY-DD.MM.YY kWh CONST <rest of row>
CONSUMPTION_ROW = re.compile(
    r'Energie\s+activ\s*[aă]\s+'
    r'(\d{1,2})\.(\d{1,2})\.(\d{2,4})\s*-\s*(\d{1,2})\.(\d{1,2})\.(\d{2,4})'
    r'\s+kWh\s+(\d+)([^\n]*)',
    re.I
)
BREAKDOWN_MARKER = re.compile(r'OUG|cf\.', re.I)
NUMBERED_ROW_PREFIX = re.compile(r'(?:^|\n)\s*\d+\.\s*$')
ROW_NUMBER = re.compile(r'\d{1,3}(?:\.\d{3})+(?:,\d+)?|\d+(?:,\d+)?')


def is_breakdown_row(text: str, row_start: int, context_chars: int = 80) -> bool:
    """True when the row belongs to the regulatory breakdown table."""
    before = text[max(0, row_start - context_chars):row_start]
    return bool(BREAKDOWN_MARKER.search(before) or NUMBERED_ROW_PREFIX.search(before))


def measured_quantity(rest_of_row: str) -> float:
    """
    Read the measured quantity from the columns after the constant.

    The quantity is the first number after the last meter-index token
    ("26270/cit", "26222/estimat convenie"); rows without index tokens
    fall back to their first number.

    Example:
        >>> measured_quantity(" 26222/estimat convenie 26270/cit 48 0 48")
        48.0
    """
    tail = rest_of_row.rsplit('/', 1)[-1] if '/' in rest_of_row else rest_of_row
    number = ROW_NUMBER.search(tail)
    if not number:
        return 0.0
    value = normalize_number(number.group(0))
    return value if is_number(value) else 0.0


class PPCExtractor(SupplierExtractor):
    """
    Extractor for PPC Energie invoices.

    Sites are identified by 9-digit ELECTEL codes, read either from the
    "Cod ELECTEL" label or from the tail of a RO###E######### POD.
    Consumption is split per table row into ConsumptionPeriod values.

    Example:
        >>> extractor = PPCExtractor()
        >>> [p.quantity for p in extractor.extract_consumption_periods(page)]
        [0, 48]
    """

    name = "ppc"
    supports_multiple_periods = True
    skips_cover_page = False

    def __init__(self) -> None:
        super().__init__()
        self.breakdown_context_chars = get_config("extraction.breakdown_context_chars", 80)

    def build_segmenter(self) -> SectionSegmenter:
        return SectionSegmenter(
            header_rules=[
                (re.compile(
                    rf'^([{_UPPER}][{_UPPER}0-9 .\-]+)[\r\n]+Adres[aă]\s+loc\s+consum',
                    re.M
                ), 0),
                (r'Cod\s+ELECTEL', 500),
            ],
            window_before=get_config("extraction.ppc.window_before", 800),
            window_after=get_config("extraction.ppc.window_after", 3000)
        )

    def extract_invoice_number(self, text: str) -> str:
        return INVOICE_NUMBER.extract(text)

    def extract_issue_date(self, text: str) -> str:
        return ISSUE_DATE.extract(text)

    def extract_client_name(self, text: str) -> str:
        return (
            CLIENT_NAME.extract(text)
            or CLIENT_BEFORE_CORRESPONDENCE.extract(text)
            or extract_generic_client_name(text)
        )

    def extract_total_payment(self, text: str) -> float:
        return round_money(TOTAL_PAYMENT.extract(text, default=0.0))

    def extract_billing_period(self, text: str) -> BillingPeriod:
        return BILLING_PERIOD.extract(text, default=BillingPeriod())

    def extract_site_codes(self, text: str) -> List[str]:
        codes: List[str] = []
        for found in SITE_CODES.find_all(text):
            if found.value not in codes:
                codes.append(found.value)
        logger.debug(f"ELECTEL codes found: {codes}")
        return codes

    def extract_site_code(self, text: str) -> str:
        return SITE_CODES.extract(text)

    def extract_site_name(self, text: str) -> str:
        return clean_text(SITE_NAME.extract(text.strip() if text else text))

    def extract_meter_point_code(self, text: str) -> str:
        return METER_POINT.extract(text)

    def extract_address(self, text: str, site_scoped: bool = True) -> str:
        return clean_text(ADDRESS.extract(text))

    def extract_consumption(self, text: str) -> Consumption:
        result = CONSUMPTION.first_match(text)
        if result is None:
            return Consumption()
        return Consumption(quantity=round_quantity(result.value), source_label=result.label)

    def extract_consumption_periods(self, text: str) -> List[ConsumptionPeriod]:
        """
        Split a site section into its consumption periods.

        Rows of the breakdown table are skipped and repeated date ranges
        are kept once, in the order first found.

        Args:
            text: Site section text.

        Returns:
            List of ConsumptionPeriod, possibly empty.
        """
        periods: List[ConsumptionPeriod] = []
        if not text:
            return periods

        seen = set()
        for row in CONSUMPTION_ROW.finditer(text):
            if is_breakdown_row(text, row.start(), self.breakdown_context_chars):
                logger.debug(f"Skipping breakdown row at {row.start()}")
                continue

            period = self._period_from_row(row)
            if period is None:
                continue

            key = (period.start_date, period.end_date)
            if key in seen:
                continue
            seen.add(key)
            periods.append(period)

        logger.debug(f"Consumption periods found: {len(periods)}")
        return periods

    @staticmethod
    def _period_from_row(row: Match) -> Optional[ConsumptionPeriod]:
        groups = row.groups()
        start_date = normalize_date(groups[0:3])
        end_date = normalize_date(groups[3:6])
        if not (start_date and end_date):
            return None

        return ConsumptionPeriod(
            start_date=start_date,
            end_date=end_date,
            quantity=round_quantity(measured_quantity(groups[7] or "")),
            source_label=CONSUMPTION_LABEL
        )
