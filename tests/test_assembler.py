import pytest

from src.extraction.invoice_record import InvoiceRecord, RecordStatus, Supplier
from src.postprocessor.assembler import RecordAssembler


COMPLETE = dict(
    invoice_number="EFSR2500123456",
    issue_date="2025-02-15",
    site_code="7001234567",
    start_date="2025-01-01",
    end_date="2025-01-31",
    quantity=1250,
    source_label="Total loc de consum",
    total_payment=1234.56,
)


def test_complete_record_is_ok(assembler):
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA, **COMPLETE)

    assert record.status == RecordStatus.OK
    assert record.observations == ""
    assert record.id == "rec-1"
    assert record.processing_date == "2025-03-01"


def test_missing_fields_are_listed_in_fixed_order(assembler):
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.PPC)

    assert record.status == RecordStatus.INCOMPLETE
    assert record.observations == (
        "incomplete data: invoice number, issue date, site code, "
        "billing period, total payment"
    )
    assert record.source_label == "N/A"


def test_half_billing_period_is_missing(assembler):
    fields = dict(COMPLETE, end_date="")
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA, **fields)
    assert record.observations == "incomplete data: billing period"


def test_unknown_supplier_is_error_even_when_complete(assembler):
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.UNKNOWN, **COMPLETE)

    assert record.status == RecordStatus.ERROR
    assert record.observations == "incomplete data: unknown supplier"


def test_unknown_supplier_comes_first(assembler):
    fields = dict(COMPLETE, total_payment=0)
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.UNKNOWN, **fields)
    assert record.observations == "incomplete data: unknown supplier, total payment"


@pytest.mark.parametrize("dropped", [
    "invoice_number", "issue_date", "site_code", "start_date", "end_date", "total_payment"
])
def test_status_monotonicity(assembler, dropped):
    fields = dict(COMPLETE)
    fields[dropped] = 0 if dropped == "total_payment" else ""

    known = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA, **fields)
    unknown = assembler.assemble(file_name="f.pdf", supplier=Supplier.UNKNOWN, **fields)

    assert known.status == RecordStatus.INCOMPLETE
    assert unknown.status == RecordStatus.ERROR


def test_inverted_period_is_swapped(assembler):
    fields = dict(COMPLETE, start_date="2025-01-31", end_date="2025-01-01")
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA, **fields)

    assert (record.start_date, record.end_date) == ("2025-01-01", "2025-01-31")


def test_rounding_and_non_negative_values(assembler):
    fields = dict(COMPLETE, quantity=47.5, total_payment=10.005)
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA, **fields)
    assert record.consumption_kwh == 48
    assert record.total_payment == 10.01

    negative = dict(COMPLETE, quantity=-5, total_payment=-3.0)
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA, **negative)
    assert record.consumption_kwh == 0
    assert record.total_payment == 0.0
    assert record.status == RecordStatus.INCOMPLETE


def test_error_record(assembler):
    record = assembler.error_record("scan.pdf", "File is empty", document_link="in/scan.pdf")

    assert record.supplier == Supplier.UNKNOWN
    assert record.status == RecordStatus.ERROR
    assert record.observations == "File is empty"
    assert record.document_link == "in/scan.pdf"


def test_default_ids_are_unique():
    assembler = RecordAssembler()
    first = assembler.assemble(file_name="f.pdf", supplier=Supplier.PPC)
    second = assembler.assemble(file_name="f.pdf", supplier=Supplier.PPC)
    assert first.id != second.id


def test_record_serialization(assembler):
    record = assembler.assemble(file_name="f.pdf", supplier=Supplier.ELECTRICA, **COMPLETE)
    data = record.to_dict()

    assert list(data)[:3] == ["id", "file_name", "supplier"]
    assert data["supplier"] == "ELECTRICA"
    assert data["status"] == "OK"
    assert '"consumption_kwh": 1250' in record.to_json()
    assert InvoiceRecord.from_dict(data) == record
    assert record.month == "2025-01"
