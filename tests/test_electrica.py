from src.extraction.electrica import ElectricaExtractor
from src.extraction.invoice_record import BillingPeriod, Consumption


def test_document_fields(electrica_text):
    extractor = ElectricaExtractor()

    assert extractor.extract_invoice_number(electrica_text) == "EFSR2500123456"
    assert extractor.extract_issue_date(electrica_text) == "2025-02-15"
    assert extractor.extract_client_name(electrica_text) == "PRIMARIA COMUNEI TEST"
    assert extractor.extract_total_payment(electrica_text) == 1234.56
    assert extractor.extract_billing_period(electrica_text) == BillingPeriod("2025-01-01", "2025-01-31")


def test_site_codes_in_order_of_first_occurrence(electrica_text):
    extractor = ElectricaExtractor()
    assert extractor.extract_site_codes(electrica_text) == ["7001234567", "7001234568"]
    assert extractor.extract_site_code(electrica_text) == "7001234567"


def test_site_fields_from_section():
    section = (
        "DETALII LOC DE CONSUM – SCOALA GIMNAZIALA - energie activa\n"
        "Adresa loc de consum: Str. Scolii nr. 2, Comuna Test, Cod postal 407001\n"
        "COD Loc de consum (NLC): 7001234567\n"
        "POD: 594033100000123456\n"
        "Total loc de consum: 1.250 kWh"
    )
    extractor = ElectricaExtractor()

    assert extractor.extract_site_name(section) == "SCOALA GIMNAZIALA"
    assert extractor.extract_address(section) == "Str. Scolii nr. 2, Comuna Test"
    assert extractor.extract_meter_point_code(section) == "594033100000123456"
    assert extractor.extract_consumption(section) == Consumption(1250, "Total loc de consum")


def test_client_address_when_not_site_scoped(electrica_text):
    extractor = ElectricaExtractor()
    address = extractor.extract_address(electrica_text, site_scoped=False)
    assert address == "Str. Principala nr. 1, Comuna Test, judetul Cluj"


def test_implausible_consumption_falls_through():
    text = "Total loc de consum: 99.999.999 kWh\nCantitate facturata: 420 kWh"
    consumption = ElectricaExtractor().extract_consumption(text)
    assert consumption == Consumption(420, "Cantitate facturată")


def test_missing_data_is_empty_not_an_error():
    extractor = ElectricaExtractor()
    assert extractor.extract_invoice_number("") == ""
    assert extractor.extract_total_payment("nimic") == 0.0
    assert extractor.extract_billing_period("nimic") == BillingPeriod()
    assert extractor.extract_consumption("nimic") == Consumption()
    assert extractor.extract_site_codes("nimic") == []
