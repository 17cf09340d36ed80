from src.extraction.segmenter import (
    PAGE_BREAK,
    SectionSegmenter,
    has_page_breaks,
    split_pages
)


def test_split_pages():
    text = "one" + PAGE_BREAK + "two" + PAGE_BREAK
    assert [page.strip() for page in split_pages(text)] == ["one", "two", ""]
    assert split_pages("single") == ["single"]
    assert has_page_breaks(text)
    assert not has_page_breaks("single")


def test_single_code_without_pages_is_whole_text():
    text = "header\nNLC 1234567890\nfooter"
    segments = SectionSegmenter().segment(text, ["1234567890"])
    assert segments == {"1234567890": text}


def test_missing_code_maps_to_whole_text():
    text = "page one" + PAGE_BREAK + "page two"
    segments = SectionSegmenter().segment(text, ["1111111111", "2222222222"])
    assert list(segments) == ["1111111111", "2222222222"]
    assert all(segment == text for segment in segments.values())


def test_one_segment_per_code_by_page(electrica_text):
    codes = ["7001234567", "7001234568"]
    segments = SectionSegmenter().segment(electrica_text, codes, skip_first_page=True)

    assert list(segments) == codes
    for code, segment in segments.items():
        assert code in segment
    assert "7001234568" not in segments["7001234567"]
    assert segments["7001234567"].startswith("DETALII LOC DE CONSUM")


def test_skip_first_page_falls_back_to_cover():
    text = "cover NLC 1111111111" + PAGE_BREAK + "site NLC 2222222222"
    segmenter = SectionSegmenter()

    assert segmenter.section_for(text, "1111111111", skip_first_page=True) == "cover NLC 1111111111"
    assert segmenter.section_for(text, "2222222222", skip_first_page=True) == "site NLC 2222222222"


def test_skip_first_page_prefers_later_pages():
    text = "summary 1111111111 2222222222" + PAGE_BREAK + "detail 1111111111"
    segmenter = SectionSegmenter()

    assert segmenter.section_for(text, "1111111111", skip_first_page=True) == "detail 1111111111"
    assert segmenter.section_for(text, "1111111111") == "summary 1111111111 2222222222"


def test_header_sections_without_page_breaks():
    text = (
        "Cover sheet\n"
        "DETALII LOC DE CONSUM A\nNLC 1111111111\nTotal 10 kWh\n"
        "DETALII LOC DE CONSUM B\nNLC 2222222222\nTotal 20 kWh\n"
    )
    segmenter = SectionSegmenter(header_rules=[(r'DETALII\s+LOC\s+DE\s+CONSUM', 0)])
    segments = segmenter.segment(text, ["1111111111", "2222222222"])

    assert segments["1111111111"] == "DETALII LOC DE CONSUM A\nNLC 1111111111\nTotal 10 kWh"
    assert segments["2222222222"] == "DETALII LOC DE CONSUM B\nNLC 2222222222\nTotal 20 kWh"


def test_header_lead_in_is_included():
    text = "xx\nSITE A\nCod ELECTEL 111111111 ...\nSITE B\nCod ELECTEL 222222222 ..."
    segmenter = SectionSegmenter(header_rules=[(r'Cod\s+ELECTEL', 7)])
    segments = segmenter.segment(text, ["111111111", "222222222"])

    assert segments["111111111"].startswith("SITE A")
    assert segments["222222222"].startswith("SITE B")


def test_window_fallback():
    text = "a" * 100 + "1111111111" + "b" * 100 + "2222222222" + "c" * 100
    segmenter = SectionSegmenter(window_before=10, window_after=30)
    segments = segmenter.segment(text, ["1111111111", "2222222222"])

    assert segments["1111111111"] == "a" * 10 + "1111111111" + "b" * 20
    assert segments["2222222222"] == "b" * 10 + "2222222222" + "c" * 20
