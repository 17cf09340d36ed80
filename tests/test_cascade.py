import math
import re

from src.extraction.cascade import FieldCascade, PatternAttempt
from src.postprocessor.normalizers import normalize_number
from src.postprocessor.validators import (
    all_of,
    excludes,
    matches,
    min_length,
    not_containing,
    numeric_range
)


def _number(match):
    return normalize_number(match.group(1))


def test_validators():
    assert min_length(5)("ABCDE")
    assert not min_length(5)(" ABC ")
    assert matches(r'[0-9]+')("7001234567")
    assert not matches(r'[0-9]+')("70012A")
    assert not excludes(r'PIATA')("piata concurentiala")
    assert excludes(r'PIATA')("COMUNA BANIA")
    assert not_containing("POD")("CAMIN")
    assert not not_containing("POD")("POD 123")


def test_numeric_range_rejects_nan_and_bounds():
    check = numeric_range(0, 100)
    assert check(0)
    assert check(99.9)
    assert not check(100)
    assert not check(-1)
    assert not check(math.nan)
    assert numeric_range(0, 100, exclusive_max=False)(100)


def test_all_of():
    check = all_of(min_length(3), matches(r'[A-Z]+'))
    assert check("ABC")
    assert not check("AB")
    assert not check("abc")


def test_first_match_respects_attempt_order():
    cascade = FieldCascade("number", [
        PatternAttempt(r'Serie/Nr:\s*(\w+)', label="serie"),
        PatternAttempt(r'nr\.?\s*(\w+)', label="nr", flags=re.I),
    ])
    result = cascade.first_match("Nr. AAA111 ... Serie/Nr: BBB222")

    assert result.value == "BBB222"
    assert result.label == "serie"
    assert result.attempt_index == 0


def test_rejected_value_falls_through_to_next_attempt():
    plausible = numeric_range(0, 1000)
    cascade = FieldCascade("consumption", [
        PatternAttempt(r'Total:\s*([\d.,]+)', _number, plausible, "Total"),
        PatternAttempt(r'Consum:\s*([\d.,]+)', _number, plausible, "Consum"),
    ])
    result = cascade.first_match("Total: 5.000 kWh\nConsum: 250 kWh")

    assert result.value == 250
    assert result.label == "Consum"


def test_scan_all_tests_every_match_of_an_attempt():
    text = "CLIENT piata\nCLIENT COMUNA BANIA"
    attempt = PatternAttempt(r'CLIENT\s+([^\n]+)', validator=matches(r'[A-Z ]+'))

    assert FieldCascade("client", [attempt]).extract(text) == ""
    assert FieldCascade("client", [attempt], scan_all=True).extract(text) == "COMUNA BANIA"


def test_extract_default_when_nothing_matches():
    cascade = FieldCascade("x", [PatternAttempt(r'absent\s+(\d+)')])
    assert cascade.extract("", default=0.0) == 0.0
    assert cascade.extract("nothing here", default=None) is None


def test_find_all_orders_by_position_across_attempts():
    cascade = FieldCascade("codes", [
        PatternAttempt(r'NLC:\s*(\d{4})'),
        PatternAttempt(r'Cod:\s*(\d{4})'),
    ])
    found = cascade.find_all("Cod: 2222 NLC: 1111 Cod: 3333")

    assert [item.value for item in found] == ["2222", "1111", "3333"]
    assert [item.attempt_index for item in found] == [1, 0, 1]
