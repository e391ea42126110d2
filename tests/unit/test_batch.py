"""Tests for sequential batch extraction."""

import asyncio

import pytest

from paniniscraper.batch import BatchOrchestrator
from paniniscraper.errors import InvalidUrlError, ProductNotFoundError, ScrapingFailedError
from paniniscraper.pipeline import ExtractionPipeline

from tests.helpers import StubFetcher, counter_delta

A = "https://panini.com.br/a"
B = "https://panini.com.br/b"
C = "https://panini.com.br/c"


@pytest.mark.unit
class TestBatchOrchestrator:
    @pytest.mark.asyncio
    async def test_empty_input(self, pipeline, stub_fetcher):
        result = await BatchOrchestrator(pipeline).run([])
        assert result.successes == () and result.failures == ()
        assert result.total_processed == 0
        assert stub_fetcher.calls == []

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_caller_urls_and_order(self, pipeline, stub_fetcher, page_builder):
        stub_fetcher.pages[A] = page_builder(title="Primeiro")
        stub_fetcher.pages[C] = page_builder(title="Terceiro")
        stub_fetcher.pages[B] = page_builder(price=None)

        urls = ["panini.com.br/a/", "https://example.com/x", B, f" {C} "]
        with counter_delta("paniniscraper_batch_items_total", {"status": "failed"}, expected_delta=2):
            result = await BatchOrchestrator(pipeline).run(urls)

        assert [s.url for s in result.successes] == ["panini.com.br/a/", f" {C} "]
        assert [s.product.title for s in result.successes] == ["Primeiro", "Terceiro"]
        assert [f.url for f in result.failures] == ["https://example.com/x", B]
        assert isinstance(result.failures[0].error, InvalidUrlError)
        assert isinstance(result.failures[1].error, ProductNotFoundError)
        assert result.failures[1].message == "Product not found or page structure has changed"
        assert result.success_count + result.failure_count == result.total_processed == 4
        assert stub_fetcher.calls == [A, B, C]

    @pytest.mark.asyncio
    async def test_items_run_one_at_a_time(self, page_builder):
        events = []

        class SlowFetcher(StubFetcher):
            async def fetch(self, url):
                events.append(("start", url))
                await asyncio.sleep(0.01)
                events.append(("end", url))
                return await super().fetch(url)

        fetcher = SlowFetcher({A: page_builder(), B: page_builder()})
        await BatchOrchestrator(ExtractionPipeline(fetcher)).run([A, B])

        assert events == [("start", A), ("end", A), ("start", B), ("end", B)]

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_captured(self, page_builder):
        class ExplodingPipeline(ExtractionPipeline):
            async def run(self, url):
                if url == A:
                    raise KeyError("boom")
                return await super().run(url)

        pipeline = ExplodingPipeline(StubFetcher({B: page_builder()}))
        result = await BatchOrchestrator(pipeline).run([A, B])

        assert result.success_count == 1
        (failure,) = result.failures
        assert failure.url == A
        assert type(failure.error) is ScrapingFailedError
        assert failure.message == "Failed to scrape product: 'boom'"
