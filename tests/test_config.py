from pathlib import Path

import pytest

from config import ConfigurationManager, get_config


@pytest.fixture
def fresh_config():
    ConfigurationManager.reset()
    yield ConfigurationManager
    ConfigurationManager.reset()


def test_defaults_are_loaded(fresh_config):
    assert get_config("ocr.tesseract.lang") == "ron"
    assert get_config("input.pdf.min_text_chars") == 100
    assert get_config("input.pdf.missing", 7) == 7
    assert get_config("ocr.tesseract.lang.deeper", "x") == "x"


def test_relative_paths_are_anchored(fresh_config):
    assert Path(get_config("paths.output_dir")).is_absolute()


def test_override_file_is_merged_over_defaults(fresh_config, tmp_path):
    override = tmp_path / "site.yaml"
    override.write_text(
        "processing:\n"
        "  max_workers: 8\n"
        "ocr:\n"
        "  tesseract:\n"
        "    psm: 6\n",
        encoding="utf-8"
    )

    config = fresh_config(str(override))

    assert config.get("processing.max_workers") == 8
    assert config.get("ocr.tesseract.psm") == 6
    assert config.get("ocr.tesseract.lang") == "ron"
    assert ConfigurationManager() is config


def test_missing_override_file(fresh_config, tmp_path):
    with pytest.raises(FileNotFoundError):
        fresh_config(str(tmp_path / "absent.yaml"))
