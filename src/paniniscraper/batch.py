"""
Batch orchestration over the single-URL pipeline.
"""

from __future__ import annotations

from typing import Iterable, List
from uuid import uuid4

import structlog

from paniniscraper.errors import ScrapingFailedError
from paniniscraper.models import BatchResult, FailedProduct, ScrapedProduct
from paniniscraper.observability.metrics import increment
from paniniscraper.pipeline import ExtractionPipeline


class BatchOrchestrator:
    """
    Extract many URLs one after another.

    Items are awaited strictly in input order and each failure is recorded
    against the URL exactly as the caller supplied it. ``run`` never raises
    for an item failure.
    """

    def __init__(self, pipeline: ExtractionPipeline) -> None:
        self.pipeline = pipeline
        self.logger = structlog.get_logger(self.__class__.__name__)

    async def run(self, urls: Iterable[str]) -> BatchResult:
        successes: List[ScrapedProduct] = []
        failures: List[FailedProduct] = []

        with structlog.contextvars.bound_contextvars(correlation_id=uuid4().hex):
            for url in urls:
                try:
                    record = await self.pipeline.run(url)
                except ScrapingFailedError as e:
                    failures.append(FailedProduct(url=url, error=e, message=e.message))
                    increment("batch_items_total", labels={"status": "failed"})
                except Exception as e:
                    error = ScrapingFailedError(f"Failed to scrape product: {e}", str(url))
                    failures.append(FailedProduct(url=url, error=error, message=error.message))
                    increment("batch_items_total", labels={"status": "failed"})
                    self.logger.error("Unexpected batch item failure", url=url, error=str(e))
                else:
                    successes.append(ScrapedProduct(url=url, product=record))
                    increment("batch_items_total", labels={"status": "succeeded"})

            result = BatchResult(successes=tuple(successes), failures=tuple(failures))
            self.logger.info(
                "Batch completed",
                total=result.total_processed,
                succeeded=result.success_count,
                failed=result.failure_count,
            )
        return result
