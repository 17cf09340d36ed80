import json

import main


def test_resolve_output():
    assert main.resolve_output(None) == {'output_dir': None, 'excel_filename': None}
    assert main.resolve_output("rapoarte/ianuarie.xlsx") == {
        'output_dir': "rapoarte", 'excel_filename': "ianuarie.xlsx"
    }
    assert main.resolve_output("rapoarte") == {'output_dir': "rapoarte", 'excel_filename': None}


def test_parse_arguments_defaults():
    args = main.parse_arguments(["--input", "facturi"])

    assert args.input == "facturi"
    assert args.output is None
    assert args.workers is None
    assert not args.no_excel
    assert not args.json


def test_main_runs_a_directory_of_text_invoices(tmp_path, premier_text, unknown_text):
    source = tmp_path / "facturi"
    source.mkdir()
    (source / "a_premier.txt").write_text(premier_text, encoding="utf-8")
    (source / "b_scan.txt").write_text(unknown_text, encoding="utf-8")
    out = tmp_path / "out"

    code = main.main([
        "--input", str(source), "--output", str(out),
        "--no-excel", "--json", "--workers", "2", "--quiet"
    ])

    assert code == 0
    with open(out / "invoice_records.json", encoding="utf-8") as f:
        payload = json.load(f)
    assert [r["status"] for r in payload["records"]] == ["OK", "ERROR"]
    assert payload["summary"]["total_files"] == 2


def test_main_reports_missing_input(tmp_path):
    assert main.main(["--input", str(tmp_path / "absent"), "--quiet"]) == 1
