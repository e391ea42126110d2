"""Tests for ProductRecord invariants and batch result bookkeeping."""

import dataclasses

import pytest

from paniniscraper.errors import InvalidUrlError, ProductNotFoundError, RecordValidationError, ScrapingFailedError
from paniniscraper.models import FORMAT_UNSPECIFIED, BatchResult, FailedProduct, ProductRecord, ScrapedProduct


def make_record(**overrides) -> ProductRecord:
    fields = dict(
        title="Sandman Vol. 1",
        full_price=99.90,
        current_price=79.92,
        in_stock=True,
        is_pre_order=False,
        image_url="https://d1.cloudfront.net/sandman.jpg",
        source_url="https://panini.com.br/sandman-vol-1",
        format="Capa dura",
        contributors=("Neil Gaiman",),
        product_id="SAND001",
    )
    fields.update(overrides)
    return ProductRecord(**fields)


@pytest.mark.unit
class TestProductRecord:
    def test_valid_record(self):
        record = make_record()
        assert record.has_discount
        assert record.discount_percentage == 20
        assert record.savings_amount == pytest.approx(19.98)

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            make_record().title = "Outro"

    def test_no_discount(self):
        record = make_record(current_price=99.90)
        assert not record.has_discount
        assert record.discount_percentage == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": "   "},
            {"full_price": -1.0, "current_price": -2.0},
            {"current_price": -0.01},
            {"current_price": 120.0},
            {"image_url": "/media/relative.jpg"},
            {"source_url": "not a url"},
            {"format": ""},
            {"contributors": ("Neil Gaiman", "Neil Gaiman")},
            {"product_id": " "},
        ],
    )
    def test_invariants(self, overrides):
        with pytest.raises(RecordValidationError):
            make_record(**overrides)

    def test_empty_image_and_sentinel_format_are_valid(self):
        record = make_record(image_url="", format=FORMAT_UNSPECIFIED, contributors=())
        assert record.image_url == ""
        assert record.format == "Formato não especificado"

    def test_pre_order_and_in_stock_may_both_hold(self):
        record = make_record(is_pre_order=True, in_stock=True)
        assert record.is_pre_order and record.in_stock

    def test_to_dict(self):
        assert make_record().to_dict() == {
            "title": "Sandman Vol. 1",
            "full_price": 99.90,
            "current_price": 79.92,
            "is_pre_order": False,
            "in_stock": True,
            "image_url": "https://d1.cloudfront.net/sandman.jpg",
            "url": "https://panini.com.br/sandman-vol-1",
            "format": "Capa dura",
            "contributors": ["Neil Gaiman"],
            "id": "SAND001",
        }


@pytest.mark.unit
class TestErrors:
    def test_taxonomy(self):
        assert issubclass(InvalidUrlError, ScrapingFailedError)
        assert issubclass(ProductNotFoundError, ScrapingFailedError)

    def test_product_not_found(self):
        error = ProductNotFoundError("https://panini.com.br/x")
        assert error.status_code == 404
        assert error.code == "PRODUCT_NOT_FOUND"
        assert str(error) == "Product not found or page structure has changed"

    def test_invalid_url_keeps_non_string_input_readable(self):
        error = InvalidUrlError(None)
        assert error.url == "None"
        assert error.message == "Invalid or malformed URL provided"
        assert error.code == "INVALID_URL"


@pytest.mark.unit
class TestBatchResult:
    def test_empty(self):
        result = BatchResult()
        assert (result.total_processed, result.success_count, result.failure_count) == (0, 0, 0)

    def test_counts_and_dict(self):
        error = ScrapingFailedError("Failed to scrape product: boom", "https://panini.com.br/b", 503)
        result = BatchResult(
            successes=(ScrapedProduct(url="panini.com.br/a/", product=make_record()),),
            failures=(FailedProduct(url="https://panini.com.br/b", error=error, message=error.message),),
        )
        assert result.success_count + result.failure_count == result.total_processed == 2

        payload = result.to_dict()
        assert payload["successes"][0]["url"] == "panini.com.br/a/"
        assert payload["failures"] == [
            {
                "url": "https://panini.com.br/b",
                "code": "SCRAPING_ERROR",
                "message": "Failed to scrape product: boom",
                "status_code": 503,
            }
        ]
