"""
Public extraction API.

``extract_one`` and ``extract_many`` open a transport for the duration of the
call. ``make_extractor`` returns a ReusableExtractor bound to one transport,
which is cheaper when scraping many pages from a long-lived process.
"""

from __future__ import annotations

import time
from typing import Iterable, Optional

import structlog

from paniniscraper.batch import BatchOrchestrator
from paniniscraper.config.config import HttpConfig, SiteConfig
from paniniscraper.crawler.http_client import HttpClient
from paniniscraper.extractor.details import Clock
from paniniscraper.models import BatchResult, ProductRecord
from paniniscraper.pipeline import ExtractionPipeline
from paniniscraper.protocols import PageFetcher

logger = structlog.get_logger(__name__)


class ReusableExtractor:
    """Awaitable extractor sharing a single transport across calls."""

    def __init__(
        self,
        config: Optional[HttpConfig] = None,
        *,
        site: Optional[SiteConfig] = None,
        fetcher: Optional[PageFetcher] = None,
        clock: Clock = time.time,
    ) -> None:
        self._owns_fetcher = fetcher is None
        self.fetcher: PageFetcher = fetcher if fetcher is not None else HttpClient(config)
        self.pipeline = ExtractionPipeline(self.fetcher, site=site, clock=clock)
        self.batch = BatchOrchestrator(self.pipeline)

    async def __call__(self, url: str) -> ProductRecord:
        """
        Extract a single product.

        Raises:
            InvalidUrlError: when the URL is not a product URL of the site.
            ProductNotFoundError: when the page has no title or no price.
            ScrapingFailedError: for transport and any other extraction failure.
        """
        return await self.pipeline.run(url)

    async def extract_many(self, urls: Iterable[str]) -> BatchResult:
        return await self.batch.run(urls)

    def update_config(self, config: HttpConfig) -> None:
        """Merge new transport settings into the live client."""
        if not isinstance(self.fetcher, HttpClient):
            raise TypeError("update_config requires the built-in HttpClient transport")
        self.fetcher.update_config(config)

    async def aclose(self) -> None:
        if self._owns_fetcher and isinstance(self.fetcher, HttpClient):
            await self.fetcher.close()

    async def __aenter__(self) -> "ReusableExtractor":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def make_extractor(
    config: Optional[HttpConfig] = None,
    *,
    site: Optional[SiteConfig] = None,
    fetcher: Optional[PageFetcher] = None,
    clock: Clock = time.time,
) -> ReusableExtractor:
    return ReusableExtractor(config, site=site, fetcher=fetcher, clock=clock)


async def extract_one(
    url: str,
    config: Optional[HttpConfig] = None,
    *,
    site: Optional[SiteConfig] = None,
    fetcher: Optional[PageFetcher] = None,
) -> ProductRecord:
    """Extract one product page. See ReusableExtractor.__call__ for errors."""
    async with make_extractor(config, site=site, fetcher=fetcher) as extractor:
        return await extractor(url)


async def extract_many(
    urls: Iterable[str],
    config: Optional[HttpConfig] = None,
    *,
    site: Optional[SiteConfig] = None,
    fetcher: Optional[PageFetcher] = None,
) -> BatchResult:
    """Extract every URL in order. Item failures land in ``BatchResult.failures``."""
    urls = list(urls)
    logger.info("Starting batch extraction", count=len(urls))
    async with make_extractor(config, site=site, fetcher=fetcher) as extractor:
        return await extractor.extract_many(urls)
