"""
Single-URL extraction pipeline.

    Unvalidated -> Validated -> Fetched -> Parsed -> Assembled -> Done

Every failure leaves the pipeline as a ScrapingFailedError (or one of its
subclasses). Invalid URLs never reach the network.
"""

from __future__ import annotations

import re
import time
from typing import Optional

import structlog

from paniniscraper.config.config import SiteConfig
from paniniscraper.errors import (
    InvalidUrlError,
    MissingFieldError,
    ProductNotFoundError,
    ScrapingFailedError,
    TransportError,
)
from paniniscraper.extractor.assembler import assemble_record
from paniniscraper.extractor.details import Clock
from paniniscraper.extractor.document import HtmlDocument
from paniniscraper.models import ProductRecord
from paniniscraper.observability.metrics import increment
from paniniscraper.protocols import PageFetcher

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_url(url: str) -> str:
    """Trim whitespace, drop one trailing slash and default the scheme to https."""
    normalized = url.strip()
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    if not _SCHEME_RE.match(normalized):
        normalized = f"https://{normalized}"
    return normalized


class ExtractionPipeline:
    """Runs one URL through validation, fetch and assembly."""

    def __init__(
        self,
        fetcher: PageFetcher,
        site: Optional[SiteConfig] = None,
        clock: Clock = time.time,
    ) -> None:
        self.fetcher = fetcher
        self.site = site or SiteConfig()
        self.clock = clock
        self._url_pattern = re.compile(self.site.url_pattern)
        self.logger = structlog.get_logger(self.__class__.__name__)

    def validate_url(self, url: object) -> str:
        """
        Return the normalized URL.

        Raises:
            InvalidUrlError: for non-string or blank input, or a URL outside the site.
        """
        if not isinstance(url, str) or not url.strip():
            raise InvalidUrlError(url)
        normalized = normalize_url(url)
        if not self._url_pattern.match(normalized):
            raise InvalidUrlError(url)
        return normalized

    async def run(self, url: object) -> ProductRecord:
        try:
            normalized = self.validate_url(url)
        except InvalidUrlError:
            increment("extractions_total", labels={"outcome": "invalid_url"})
            self.logger.warning("Rejected invalid URL", url=url)
            raise

        try:
            record = await self._extract(normalized)
        except ProductNotFoundError as e:
            increment("extractions_total", labels={"outcome": "not_found"})
            self.logger.warning("Product not found", url=normalized, error=str(e))
            raise
        except ScrapingFailedError as e:
            increment("extractions_total", labels={"outcome": "error"})
            self.logger.error("Extraction failed", url=normalized, error=e.message, status_code=e.status_code)
            raise

        increment("extractions_total", labels={"outcome": "success"})
        self.logger.info("Extracted product", url=normalized, product_id=record.product_id)
        return record

    async def _extract(self, url: str) -> ProductRecord:
        try:
            html = await self.fetcher.fetch(url)
        except TransportError as e:
            raise ScrapingFailedError(f"Failed to scrape product: {e}", url, e.status_code) from e
        except Exception as e:
            raise ScrapingFailedError(f"Failed to scrape product: {e}", url) from e

        try:
            return assemble_record(HtmlDocument(html), url, self.site, self.clock)
        except MissingFieldError as e:
            raise ProductNotFoundError(url) from e
        except Exception as e:
            raise ScrapingFailedError(f"Failed to scrape product: {e}", url) from e
