import math

import pytest

from src.postprocessor.normalizers import (
    clean_text,
    is_number,
    normalize_date,
    normalize_number,
    round_half_up,
    round_money,
    round_quantity
)


@pytest.mark.parametrize("raw, expected", [
    ("30.075,79", 30075.79),
    ("2.318", 2318.0),
    ("2,318", 2318.0),
    ("48", 48.0),
    ("8.234,50", 8234.50),
    ("1.250", 1250.0),
    ("12,5", 12.5),
    ("-3,20", -3.2),
    (" 1 234,00 ", 1234.0),
])
def test_normalize_number(raw, expected):
    assert normalize_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "abc", "12a", "--"])
def test_normalize_number_returns_nan_for_garbage(raw):
    assert math.isnan(normalize_number(raw))


def test_is_number():
    assert is_number(0)
    assert is_number(2.5)
    assert not is_number(math.nan)
    assert not is_number(None)
    assert not is_number("12")


@pytest.mark.parametrize("raw, expected", [
    ("24.02.2025", "2025-02-24"),
    ("2025-02-24", "2025-02-24"),
    ("24-02-2025", "2025-02-24"),
    ("17.10.24", "2024-10-17"),
    ("din data de 5.2.2024", "2024-02-05"),
    (("17", "10", "24"), "2024-10-17"),
    (("2025", "01", "31"), "2025-01-31"),
])
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "no date", ("1", "2"), ("123", "4", "5")])
def test_normalize_date_returns_empty_for_garbage(raw):
    assert normalize_date(raw) == ""


def test_normalize_date_keeps_impossible_calendar_dates():
    assert normalize_date("31.04.2025") == "2025-04-31"


def test_round_half_up():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(0.125, 2) == 0.13
    assert math.isnan(round_half_up(math.nan))


def test_round_quantity_and_money():
    assert round_quantity(47.5) == 48
    assert round_quantity(math.nan) == 0
    assert round_money(30075.785) == 30075.79
    assert round_money(math.nan) == 0.0


def test_clean_text():
    assert clean_text("  Str.  Scolii\n nr. 2 ") == "Str. Scolii nr. 2"
    assert clean_text(None) == ""
