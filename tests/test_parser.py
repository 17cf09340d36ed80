from dataclasses import replace

from src.extraction.base import SupplierExtractor
from src.extraction.electrica import ElectricaExtractor
from src.extraction.invoice_record import RecordStatus, Supplier
from src.extraction.parser import InvoiceParser, parse_invoice_text


def test_scenario_single_site_premier(parser, premier_text):
    records = parser.parse(premier_text, "premier.pdf")

    assert len(records) == 1
    record = records[0]
    assert record.supplier == Supplier.PREMIER
    assert record.status == RecordStatus.OK
    assert record.invoice_number == "PE2024000123"
    assert record.issue_date == "2024-02-05"
    assert record.client_name == "SC EXEMPLU INDUSTRIES SRL"
    assert record.site_code == "5001122334"
    assert record.consumption_kwh == 12450
    assert record.source_label == "Consum"
    assert record.total_payment == 8234.50
    assert record.start_date == "2024-01-01"
    assert record.end_date == "2024-01-31"
    assert record.file_name == "premier.pdf"


def test_scenario_unknown_supplier(parser, unknown_text):
    records = parser.parse(unknown_text, "scan.pdf")

    assert len(records) == 1
    assert records[0].supplier == Supplier.UNKNOWN
    assert records[0].status == RecordStatus.ERROR
    assert records[0].observations.startswith("incomplete data: unknown supplier")


def test_scenario_electrica_two_sites_on_separate_pages(parser, electrica_text):
    records = parser.parse(electrica_text, "electrica.pdf")

    assert [r.site_code for r in records] == ["7001234567", "7001234568"]
    assert [r.site_name for r in records] == ["SCOALA GIMNAZIALA", "CAMIN CULTURAL"]
    assert [r.address for r in records] == [
        "Str. Scolii nr. 2, Comuna Test",
        "Str. Morii nr. 5, Comuna Test",
    ]
    assert [r.meter_point_code for r in records] == ["594033100000123456", "594033100000123457"]
    assert [r.consumption_kwh for r in records] == [1250, 830]

    for record in records:
        assert record.supplier == Supplier.ELECTRICA
        assert record.status == RecordStatus.OK
        assert record.invoice_number == "EFSR2500123456"
        assert record.client_name == "PRIMARIA COMUNEI TEST"
        assert record.total_payment == 1234.56
        assert (record.start_date, record.end_date) == ("2025-01-01", "2025-01-31")


def test_ppc_one_record_per_consumption_period(parser, ppc_text):
    records = parser.parse(ppc_text, "ppc.pdf")

    assert [r.site_code for r in records] == ["541393231", "541393231", "541393232"]
    assert [r.consumption_kwh for r in records] == [0, 48, 228]
    assert [(r.start_date, r.end_date) for r in records] == [
        ("2024-10-17", "2025-01-16"),
        ("2025-01-17", "2025-01-31"),
        ("2025-01-01", "2025-01-31"),
    ]
    assert [r.site_name for r in records] == ["CAMIN", "CAMIN", "BLOC SPECIALISTI"]
    assert all(r.status == RecordStatus.OK for r in records)
    assert all(r.source_label == "Energie activă" for r in records)
    assert {r.invoice_number for r in records} == {"25EI 06295537"}
    assert {r.total_payment for r in records} == {30075.79}


def test_parse_is_idempotent_except_id_and_date(premier_text, electrica_text):
    parser = InvoiceParser()
    for text in (premier_text, electrica_text):
        first = parser.parse(text, "f.pdf")
        second = parser.parse(text, "f.pdf")
        normalized = [replace(r, id="", processing_date="") for r in first]
        assert normalized == [replace(r, id="", processing_date="") for r in second]


def test_document_without_site_codes_yields_one_incomplete_record(parser):
    text = "ELECTRICA FURNIZARE\nSerie/Nr: EFSR2500999999\nTotal de plata: 10,00 lei"
    records = parser.parse(text, "partial.pdf")

    assert len(records) == 1
    assert records[0].status == RecordStatus.INCOMPLETE
    assert "site code" in records[0].observations
    assert records[0].total_payment == 10.0


def test_empty_text(parser):
    records = parser.parse("", "empty.pdf")
    assert len(records) == 1
    assert records[0].status == RecordStatus.ERROR
    records = parser.parse(None, "none.pdf")
    assert records[0].status == RecordStatus.ERROR


class _ExplodingExtractor(ElectricaExtractor):
    def extract_invoice_number(self, text):
        raise RuntimeError("boom")


def test_internal_failure_becomes_error_record(assembler, premier_text):
    parser = InvoiceParser(assembler=assembler, default_extractor=_ExplodingExtractor())
    records = parser.parse(premier_text, "premier.pdf", document_link="in/premier.pdf")

    assert len(records) == 1
    assert records[0].status == RecordStatus.ERROR
    assert records[0].observations == "parse failure: boom"
    assert records[0].document_link == "in/premier.pdf"


def test_register_routes_supplier_to_extractor(premier_text):
    parser = InvoiceParser()
    extractor = _ExplodingExtractor()
    parser.register(Supplier.PREMIER, extractor)

    assert parser.extractor_for(Supplier.PREMIER) is extractor
    assert isinstance(parser.extractor_for(Supplier.CEZ), SupplierExtractor)
    assert parser.parse(premier_text, "p.pdf")[0].status == RecordStatus.ERROR


def test_parse_invoice_text(premier_text):
    records = parse_invoice_text(premier_text, "premier.pdf")
    assert records[0].consumption_kwh == 12450
