import json
from datetime import date

import pytest
from openpyxl import load_workbook

from src.output_handler import ExcelExporter, OutputHandler
from src.utils.exceptions import ExcelExportError


@pytest.fixture
def ppc_records(parser, ppc_text):
    return parser.parse(ppc_text, "ppc.pdf")


def test_excel_workbook_layout(tmp_path, ppc_records):
    path = ExcelExporter().export(ppc_records, filename="raport.xlsx", output_dir=str(tmp_path))
    workbook = load_workbook(path)

    assert workbook.sheetnames == ["Date Facturi", "Raport_Analiza"]

    invoices = workbook["Date Facturi"]
    headers = [cell.value for cell in invoices[1]]
    assert headers[:3] == ["Nume Fișier", "Furnizor", "Nr Factură"]
    assert headers[-3:] == ["Link Document", "Status", "Observații"]
    assert len(headers) == 18
    assert invoices.max_row == 4
    assert invoices.freeze_panes == "A2"
    assert invoices.column_dimensions["A"].width == 30

    row = {header: cell.value for header, cell in zip(headers, invoices[3])}
    assert row["Furnizor"] == "PPC ENERGIE"
    assert row["Cod NLC"] == "541393231"
    assert row["Consum (kWh)"] == 48
    assert row["Total Plată (RON)"] == 30075.79
    assert row["Status"] == "OK"

    analysis = workbook["Raport_Analiza"]
    assert [cell.value for cell in analysis[1]] == [
        "Cod NLC", "Denumire Locație", "2025-01", "TOTAL AN", "Medie Lunară"
    ]
    assert [cell.value for cell in analysis[2]] == ["541393231", "CAMIN", 48, 48, 48]
    assert [cell.value for cell in analysis[3]] == ["541393232", "BLOC SPECIALISTI", 228, 228, 228]


def test_default_filename_uses_client_and_date(ppc_records):
    name = ExcelExporter().default_filename(ppc_records, today=date(2025, 2, 24))
    assert name == "Raport_Facturi_COMUNA_BANIA_2025-02-24.xlsx"


def test_export_without_records_fails(tmp_path):
    with pytest.raises(ExcelExportError):
        ExcelExporter().export([], output_dir=str(tmp_path))


def test_output_handler_writes_excel_and_json(tmp_path, ppc_records):
    handler = OutputHandler(excel_enabled=True, json_enabled=True, output_dir=str(tmp_path))
    info = handler.save(ppc_records, excel_filename="raport.xlsx")

    assert info["excel_path"].endswith("raport.xlsx")
    assert info["summary"]["total_files"] == 3

    with open(info["json_path"], encoding="utf-8") as f:
        payload = json.load(f)
    assert payload["summary"]["successful_files"] == 3
    assert [r["consumption_kwh"] for r in payload["records"]] == [0, 48, 228]
    assert payload["monthly_analysis"][0]["monthly_data"] == {"2025-01": 48}


def test_output_handler_respects_disabled_outputs(tmp_path, ppc_records):
    handler = OutputHandler(excel_enabled=False, json_enabled=False, output_dir=str(tmp_path))
    info = handler.save(ppc_records)

    assert info["excel_path"] is None
    assert info["json_path"] is None
    assert list(tmp_path.iterdir()) == []
