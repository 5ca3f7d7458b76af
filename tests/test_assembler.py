"""Tests for assembling full records from listing pages."""

from __future__ import annotations

from listing_scraper.extraction.assembler import GROUP_LABELS, assemble_record, extract_title
from listing_scraper.extraction.document import parse_document

MINIMAL_PAGE = """
<table><tbody>
  <tr><td><strong>Brand</strong></td><td>Acme</td></tr>
</tbody></table>
<table><tbody>
  <tr><td><h3>Case Specifications</h3></td></tr>
  <tr><td><strong>Case diameter</strong></td><td>40 mm approx.</td></tr>
</tbody></table>
"""


def test_brand_and_case_diameter() -> None:
    record = assemble_record(MINIMAL_PAGE, "https://dealer.example/watch/1")

    assert record.basic_info.brand == "Acme"
    assert record.case.case_diameter == "40 mm"
    assert record.url == "https://dealer.example/watch/1"


def test_full_listing(listing_html: str) -> None:
    record = assemble_record(listing_html, "https://dealer.example/watch/2")

    assert record.name == "Rolex Submariner Date"
    assert record.type == "126610LN"
    assert record.basic_info.listing_code == "ABC123"
    assert record.basic_info.movement == "Automatic"
    assert record.basic_info.case_material is None
    assert record.caliber.caliber_movement == "3235"
    assert record.caliber.base_caliber is None
    assert record.case.case_diameter == "41 mm"
    assert record.case.dial == "Black"
    assert record.case.dial_numerals is None
    assert record.bracelet_strap.clasp == "Fold clasp"
    assert record.bracelet_strap.clasp_material is None


def test_page_without_sections_keeps_every_key() -> None:
    record = assemble_record("<html><body><p>Sold out</p></body></html>", "u")
    data = record.to_dict()

    assert data["name"] is None
    assert data["type"] is None
    for group, labels in GROUP_LABELS.items():
        assert list(data[group].keys()) == list(labels.keys())
        assert all(value is None for value in data[group].values())


def test_output_key_order(listing_html: str) -> None:
    record = assemble_record(listing_html, "u")

    assert list(record.to_dict().keys()) == [
        "url", "name", "type", "basic_info", "caliber", "case", "bracelet_strap",
    ]
    assert list(record.to_dict(include_identity=False).keys()) == [
        "basic_info", "caliber", "case", "bracelet_strap",
    ]


def test_diameter_without_leading_token_is_absent() -> None:
    html = (
        "<table><tr><td><h3>Case</h3></td></tr>"
        "<tr><td><strong>Case diameter</strong></td><td>approx. 42mm</td></tr></table>"
    )

    assert assemble_record(html).case.case_diameter is None


def test_title_split_on_line_breaks() -> None:
    document = parse_document("<h1>Omega Speedmaster<br/>Moonwatch Professional</h1>")

    assert extract_title(document) == ("Omega Speedmaster", "Moonwatch Professional")
    # the parsed page is left untouched
    assert document.find("br") is not None


def test_title_with_single_piece() -> None:
    document = parse_document("<h1>\n  Tudor Black Bay \n\n</h1>")

    assert extract_title(document) == ("Tudor Black Bay", None)


def test_missing_title() -> None:
    assert extract_title(parse_document("<p>x</p>")) == (None, None)


def test_accepts_parsed_document(listing_html: str) -> None:
    record = assemble_record(parse_document(listing_html))

    assert record.url is None
    assert record.basic_info.brand == "Rolex"
