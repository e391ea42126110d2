"""Tests for the details table: format, contributors and identifier."""

import pytest

from paniniscraper.extractor.details import (
    detail_rows,
    extract_contributors,
    extract_format,
    extract_identifier,
    identifier_from_url,
    split_contributors,
)
from paniniscraper.extractor.document import HtmlDocument
from paniniscraper.models import FORMAT_UNSPECIFIED

URL = "https://panini.com.br/a-vida-de-wolverine-vol-1"


def details_table(rows: str, css: str = "additional-attributes") -> str:
    return f'<table class="{css}"><tbody>{rows}</tbody></table>'


@pytest.mark.unit
class TestDetailRows:
    def test_header_rows(self):
        doc = HtmlDocument(details_table("<tr><th>Páginas</th><td>208</td></tr>"))
        assert detail_rows(doc) == [("Páginas", "208")]

    def test_data_th_rows(self):
        doc = HtmlDocument(details_table('<tr><td data-th="Formato">17 x 26 cm</td></tr>'))
        assert detail_rows(doc) == [("Formato", "17 x 26 cm")]

    def test_two_cell_rows(self):
        doc = HtmlDocument(details_table("<tr><td>Código</td><td>-</td><td>XYZ9</td></tr>", css="details-table"))
        assert detail_rows(doc) == [("Código", "XYZ9")]

    def test_empty_or_echoing_values_are_skipped(self):
        doc = HtmlDocument(details_table("<tr><th>Sku</th><td> </td></tr><tr><td>Arte</td><td>Arte</td></tr>"))
        assert detail_rows(doc) == []

    def test_tables_outside_the_details_area_are_ignored(self):
        doc = HtmlDocument("<table><tr><th>Formato</th><td>Brochura</td></tr></table>")
        assert detail_rows(doc) == []


@pytest.mark.unit
class TestFormat:
    def test_labelled_cell(self):
        doc = HtmlDocument(details_table('<tr><th>Encadernação</th><td data-th="Encadernação">Capa dura</td></tr>'))
        assert extract_format(doc) == "Capa dura"

    def test_row_label_fallback_is_case_insensitive(self):
        doc = HtmlDocument(details_table("<tr><th>FORMATO</th><td>Brochura</td></tr>", css="details-table"))
        assert extract_format(doc) == "Brochura"

    def test_sentinel_when_missing(self):
        assert extract_format(HtmlDocument("<p>sem tabela</p>")) == FORMAT_UNSPECIFIED


@pytest.mark.unit
class TestContributors:
    def test_split_trims_and_deduplicates_in_order(self):
        assert split_contributors(" Stan Lee, Jack Kirby,, Stan Lee ,Steve Ditko") == (
            "Stan Lee",
            "Jack Kirby",
            "Steve Ditko",
        )

    def test_overlong_tokens_are_dropped(self):
        assert split_contributors("A" * 100 + ", Frank Miller") == ("Frank Miller",)

    def test_labelled_cell(self):
        doc = HtmlDocument(details_table('<tr><th>Autores</th><td data-th="Autores">Alan Moore, Dave Gibbons</td></tr>'))
        assert extract_contributors(doc) == ("Alan Moore", "Dave Gibbons")

    def test_first_matching_row_wins(self):
        doc = HtmlDocument(
            details_table(
                "<tr><th>Roteiro</th><td>Neil Gaiman</td></tr><tr><th>Arte</th><td>Sam Kieth</td></tr>",
                css="details-table",
            )
        )
        assert extract_contributors(doc) == ("Neil Gaiman",)

    def test_empty_when_missing(self):
        assert extract_contributors(HtmlDocument("<p></p>")) == ()


@pytest.mark.unit
class TestIdentifier:
    def test_reference_cell_comes_first(self, fixed_clock):
        doc = HtmlDocument(
            '<div data-sku="SKU-1"></div>'
            + details_table('<tr><th>Referência</th><td data-th="Referência">AVWOL001</td></tr>')
        )
        assert extract_identifier(doc, URL, clock=fixed_clock) == "AVWOL001"

    def test_data_attribute_before_text(self, fixed_clock):
        doc = HtmlDocument('<div class="product-sku" data-sku="SKU-42">texto</div>')
        assert extract_identifier(doc, URL, clock=fixed_clock) == "SKU-42"

    def test_id_element_text(self, fixed_clock):
        doc = HtmlDocument('<span class="codigo-produto"> MNG123 </span>')
        assert extract_identifier(doc, URL, clock=fixed_clock) == "MNG123"

    def test_labelled_row(self, fixed_clock):
        doc = HtmlDocument(details_table("<tr><td>Código</td><td>COD-77</td></tr>", css="details-table"))
        assert extract_identifier(doc, URL, clock=fixed_clock) == "COD-77"

    def test_reference_pattern_in_text(self, fixed_clock):
        doc = HtmlDocument("<body><p>Referência: ABC-123</p></body>")
        assert extract_identifier(doc, URL, clock=fixed_clock) == "ABC-123"

    def test_url_fallback(self, fixed_clock):
        doc = HtmlDocument("<p></p>")
        assert extract_identifier(doc, URL + ".html?utm=1", clock=fixed_clock) == "a-vida-de-wolverine-vol-1"

    def test_synthesized_from_clock(self, fixed_clock):
        doc = HtmlDocument("<p></p>")
        product_id = extract_identifier(doc, "https://panini.com.br", id_prefix="panini", clock=fixed_clock)
        assert product_id == "panini-1700000000000"

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://panini.com.br/batman-ano-um", "batman-ano-um"),
            ("https://panini.com.br/catalog/product/view/id/42", "42"),
            ("https://panini.com.br/batman.html", "batman"),
            ("https://panini.com.br/batman?ref=home", "batman"),
            ("https://panini.com.br", ""),
        ],
    )
    def test_identifier_from_url(self, url, expected):
        assert identifier_from_url(url) == expected
