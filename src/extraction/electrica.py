"""
ELECTRICA Family Extractor.

Layout handled here (ELECTRICA Furnizare / E-Distributie and the
suppliers without a dedicated extractor):

    - Cover page with Serie/Nr, issue date, client and invoice totals
    - One "DETALII LOC DE CONSUM – <name> – energie activa" section per
      site, identified by a 10-12 digit NLC code
    - Site sections carry the POD, the site address and the
      "Total loc de consum" quantity

When more than one NLC code is found the first page is treated as a
shared cover sheet for segmentation.

Author: ML Engineering Team
"""

import re
from re import Match
from typing import List

from config import get_config
from src.postprocessor.normalizers import clean_text, round_money, round_quantity
from src.postprocessor.validators import (
    all_of,
    matches,
    min_length,
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
from .invoice_record import BillingPeriod, Consumption
from .segmenter import SectionSegmenter

# Initialize module logger
logger = get_logger(__name__)

MAX_CONSUMPTION_KWH = 10_000_000

_DAY_MONTH_YEAR = r'(\d{1,2})\.(\d{1,2})\.(\d{4})'
_ISSUE_LABEL = r'(?:data\s+emiterii|data\s+emitere|emis[aă]|dat[aă])[\s:]*'
_POSTAL_CODE = re.compile(r',?\s*Cod\s*postal\s*\d*', re.I)
_TRAILING_COMMA = re.compile(r',\s*$')


def _series_number(match: Match) -> str:
    return f"{match.group(1).strip()}-{match.group(2).strip()}"


def _location_with_commune(match: Match) -> str:
    return f"{match.group(1).strip()}, Comuna {match.group(2).strip()}"


def _clean_address(match: Match) -> str:
    address = _POSTAL_CODE.sub('', match.group(1)).strip()
    return clean_text(_TRAILING_COMMA.sub('', address))


def _longer_than(length: int):
    def validate(value) -> bool:
        return isinstance(value, str) and len(value.strip()) > length
    return validate


_plausible_kwh = numeric_range(0, MAX_CONSUMPTION_KWH)
_plausible_total = numeric_range(0)


INVOICE_NUMBER = FieldCascade("invoice_number", [
    PatternAttempt(r'Serie[\s/]+Nr\.?[\s:]*([A-Z0-9/\-]{5,})', validator=min_length(5), flags=re.I),
    PatternAttempt(r'ID\s+factur[aă][\s:]*([A-Z0-9/\-]{5,})', validator=min_length(5), flags=re.I),
    PatternAttempt(r'nr\.?\s*factur[aă][\s:]*([A-Z0-9\-/]{5,})', validator=min_length(5), flags=re.I),
    PatternAttempt(r'factura\s+nr\.?[\s:]*([A-Z0-9\-/]{5,})', validator=min_length(5), flags=re.I),
    PatternAttempt(r'seria\s+([A-Z]+)\s+nr\.?\s*(\d+)', _series_number, flags=re.I),
])

ISSUE_DATE = FieldCascade("issue_date", [
    PatternAttempt(_ISSUE_LABEL + _DAY_MONTH_YEAR, date_transform, flags=re.I),
    PatternAttempt(_ISSUE_LABEL + r'(\d{1,2})-(\d{1,2})-(\d{4})', date_transform, flags=re.I),
    PatternAttempt(_ISSUE_LABEL + r'(\d{4})-(\d{2})-(\d{2})', date_transform, flags=re.I),
    # first date printed after the series/number block
    PatternAttempt(
        r'Serie[\s/]+Nr\.?[\s:]*[A-Z0-9/\-]{5,}[\s\S]{0,200}?' + _DAY_MONTH_YEAR,
        date_transform, flags=re.I
    ),
])

_nlc_code = all_of(min_length(10), matches(r'[0-9]+'))

SITE_CODES = FieldCascade("nlc_code", [
    PatternAttempt(r'NLC[\s:)*\]]+([0-9]{10,12})', validator=_nlc_code, flags=re.I),
    PatternAttempt(r'\(NLC\)[\s:]*([0-9]{10,12})', validator=_nlc_code, flags=re.I),
    PatternAttempt(r'cod\s+loc\s+consum[\s:()NLC]*([0-9]{10,12})', validator=_nlc_code, flags=re.I),
    PatternAttempt(r'loc\s+de\s+consum[\s:()NLC]*([0-9]{10,12})', validator=_nlc_code, flags=re.I),
    PatternAttempt(r'COD\s+Loc\s+de\s+consum[\s:()NLC]*([0-9]{10,12})', validator=_nlc_code, flags=re.I),
])

SITE_NAME = FieldCascade("site_name", [
    PatternAttempt(
        r'DETALII\s+LOC\s+DE\s+CONSUM\s*[–\-]\s*([^–\-]+?)\s*[–\-]\s*energie',
        flags=re.I
    ),
    PatternAttempt(
        r'Localitatea\s+([A-Z][A-Za-z\s]+),\s*Comuna\s+([A-Z][A-Za-z\s]+)',
        _location_with_commune, flags=re.I
    ),
    PatternAttempt(r'(?:locație|locatie|punct\s+de\s+consum)[\s:]*([^\n]{10,150})', flags=re.I),
])

METER_POINT = FieldCascade("pod_code", [
    PatternAttempt(r'POD[\s:]*([0-9]{15,20})', validator=min_length(10), flags=re.I),
    PatternAttempt(r'cod\s+punct\s+măsură[\s:]*([0-9]{15,20})', validator=min_length(10), flags=re.I),
    PatternAttempt(r'Info\s+instalație\s+POD[\s:]*([0-9]{15,20})', validator=min_length(10), flags=re.I),
    PatternAttempt(r'(RO[0-9E]{10,20})', validator=min_length(10)),
])

SITE_ADDRESS = FieldCascade("site_address", [
    PatternAttempt(
        r'Adres[aă]\s+loc\s+de\s+consum[\s:]*([\s\S]*?)(?:Denumirea|Contract|COD\s+Loc|\Z)',
        _clean_address, _longer_than(10), flags=re.I
    ),
])

CLIENT_ADDRESS = FieldCascade("client_address", [
    PatternAttempt(
        r'Adresa\s+de\s+coresponden[tț][aă][\s:]*([^\n]{20,200})',
        _clean_address, _longer_than(10), flags=re.I
    ),
    PatternAttempt(r'Adres[aă]\s+sediu[\s:]*([^\n]{20,200})', _clean_address, _longer_than(10), flags=re.I),
    PatternAttempt(
        r'CLIENT[\s\S]{0,100}?Adres[aă][\s:]*([^\n]{20,200})',
        _clean_address, _longer_than(10), flags=re.I
    ),
    PatternAttempt(r'Localitatea\s+([^\n]{20,200}?)(?:Denumirea|Contract|COD)', flags=re.I),
    PatternAttempt(r'(?:str\.|strada|bd\.|bulevardul)\s*([^\n]{10,150})', flags=re.I),
])

CONSUMPTION = FieldCascade("consumption", [
    PatternAttempt(
        r'Total\s+loc\s+de\s+consum[\s:]*(-?[0-9,.]+)\s*kWh',
        number_transform, _plausible_kwh, "Total loc de consum", re.I
    ),
    PatternAttempt(
        r'Total\s+energie\s+activ[aă][\s:]*(-?[0-9,.]+)\s*kWh',
        number_transform, _plausible_kwh, "Total energie activă", re.I
    ),
    PatternAttempt(
        r'energie\s+activ[aă][\s:]*(-?[0-9,.]+)\s*kWh',
        number_transform, _plausible_kwh, "Energie activă", re.I
    ),
    PatternAttempt(
        r'Cantitate\s+facturat[aă][\s:]*(-?[0-9,.]+)\s*kWh',
        number_transform, _plausible_kwh, "Cantitate facturată", re.I
    ),
    PatternAttempt(
        r'(?:consum|cantitate)[\s:]*(-?[0-9,.]+)\s*kWh',
        number_transform, _plausible_kwh, "Consum", re.I
    ),
])

TOTAL_PAYMENT = FieldCascade("total_payment", [
    PatternAttempt(r'Total\s+de\s+plat[aă][\s:]*(-?[0-9.,]+)\s*lei', number_transform, _plausible_total, flags=re.I),
    PatternAttempt(
        r'SOLD\s+ANTERIOR[\s\S]{0,200}?TOTAL\s+DE\s+PLAT[AĂ][\s\S]{0,50}?(-?[0-9]+[.,][0-9]{2})',
        number_transform, _plausible_total, flags=re.I
    ),
    PatternAttempt(r'TOTAL\s+DE\s+PLAT[AĂ]\s*\(LEI\)[\s:]*(-?[0-9.,]+)', number_transform, _plausible_total, flags=re.I),
    PatternAttempt(r'TOTAL\s+DE\s+PLAT[AĂ][\s:]*(-?[0-9.,]+)', number_transform, _plausible_total, flags=re.I),
])

_RANGE = _DAY_MONTH_YEAR + r'[\s\-–]+' + _DAY_MONTH_YEAR

BILLING_PERIOD = FieldCascade("billing_period", [
    PatternAttempt(r'Perioad[aă]\s+de\s+facturare[\s:]*' + _RANGE, period_transform, complete_period, flags=re.I),
    PatternAttempt(r'Period[aă]\s+de\s+facturare[\s:]*' + _RANGE, period_transform, complete_period, flags=re.I),
    PatternAttempt(r'facturare[\s:]*' + _RANGE, period_transform, complete_period, flags=re.I),
    PatternAttempt(
        _DAY_MONTH_YEAR + r'\s*[\-–]\s*' + _DAY_MONTH_YEAR,
        period_transform, complete_period
    ),
])


class ElectricaExtractor(SupplierExtractor):
    """
    Extractor for ELECTRICA-style invoices.

    Also the default family: PREMIER, CEZ, ENEL, E.ON and unknown
    documents are parsed with these cascades so that partial data can
    still surface.

    Example:
        >>> extractor = ElectricaExtractor()
        >>> extractor.extract_site_codes(text)
        ['7001234567', '7001234568']
    """

    name = "electrica"
    supports_multiple_periods = False
    skips_cover_page = True

    def build_segmenter(self) -> SectionSegmenter:
        return SectionSegmenter(
            header_rules=[(r'DETALII\s+LOC\s+DE\s+CONSUM', 0)],
            window_before=get_config("extraction.electrica.window_before", 500),
            window_after=get_config("extraction.electrica.window_after", 2500)
        )

    def extract_invoice_number(self, text: str) -> str:
        return INVOICE_NUMBER.extract(text)

    def extract_issue_date(self, text: str) -> str:
        return ISSUE_DATE.extract(text)

    def extract_total_payment(self, text: str) -> float:
        return round_money(TOTAL_PAYMENT.extract(text, default=0.0))

    def extract_billing_period(self, text: str) -> BillingPeriod:
        return BILLING_PERIOD.extract(text, default=BillingPeriod())

    def extract_site_codes(self, text: str) -> List[str]:
        codes: List[str] = []
        for found in SITE_CODES.find_all(text):
            if found.value not in codes:
                codes.append(found.value)
        logger.debug(f"NLC codes found: {codes}")
        return codes

    def extract_site_code(self, text: str) -> str:
        return SITE_CODES.extract(text)

    def extract_site_name(self, text: str) -> str:
        return clean_text(SITE_NAME.extract(text))

    def extract_meter_point_code(self, text: str) -> str:
        return METER_POINT.extract(text)

    def extract_address(self, text: str, site_scoped: bool = True) -> str:
        if site_scoped:
            address = SITE_ADDRESS.extract(text)
            if address:
                return address
        return clean_text(CLIENT_ADDRESS.extract(text))

    def extract_consumption(self, text: str) -> Consumption:
        result = CONSUMPTION.first_match(text)
        if result is None:
            return Consumption()
        return Consumption(quantity=round_quantity(result.value), source_label=result.label)
