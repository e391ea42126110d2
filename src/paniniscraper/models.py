"""
Data models for extracted products and batch results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import RecordValidationError, ScrapingFailedError

FORMAT_UNSPECIFIED = "Formato não especificado"

_SOURCE_URL_RE = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)
_ABSOLUTE_URL_RE = re.compile(r"^https?://\S+$")


@dataclass(slots=True, frozen=True)
class ProductRecord:
    """A validated product extracted from a single page."""

    title: str
    full_price: float
    current_price: float
    in_stock: bool
    is_pre_order: bool
    image_url: str
    source_url: str
    format: str
    contributors: Tuple[str, ...]
    product_id: str

    def __post_init__(self) -> None:
        """Re-check every invariant so a faulty extractor cannot emit a corrupt record."""
        if not self.title or not self.title.strip():
            raise RecordValidationError("Product title is required")
        if self.full_price < 0:
            raise RecordValidationError("Full price must be non-negative")
        if self.current_price < 0:
            raise RecordValidationError("Current price must be non-negative")
        if self.current_price > self.full_price:
            raise RecordValidationError("Current price cannot be higher than full price")
        if self.image_url and not _ABSOLUTE_URL_RE.match(self.image_url):
            raise RecordValidationError("Image URL must be absolute or empty")
        if not self.source_url or not _SOURCE_URL_RE.match(self.source_url):
            raise RecordValidationError("Valid product URL is required")
        if not self.format:
            raise RecordValidationError("Product format is required")
        if len(set(self.contributors)) != len(self.contributors):
            raise RecordValidationError("Contributors must not contain duplicates")
        if not self.product_id or not self.product_id.strip():
            raise RecordValidationError("Product ID is required")

    @property
    def has_discount(self) -> bool:
        return self.current_price < self.full_price

    @property
    def discount_percentage(self) -> int:
        if not self.has_discount:
            return 0
        return round((self.full_price - self.current_price) / self.full_price * 100)

    @property
    def savings_amount(self) -> float:
        return self.full_price - self.current_price

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "full_price": self.full_price,
            "current_price": self.current_price,
            "is_pre_order": self.is_pre_order,
            "in_stock": self.in_stock,
            "image_url": self.image_url,
            "url": self.source_url,
            "format": self.format,
            "contributors": list(self.contributors),
            "id": self.product_id,
        }


@dataclass(slots=True, frozen=True)
class ScrapedProduct:
    url: str
    product: ProductRecord


@dataclass(slots=True, frozen=True)
class FailedProduct:
    url: str
    error: ScrapingFailedError
    message: str


@dataclass(slots=True, frozen=True)
class BatchResult:
    """Outcome of a batch run. Entries keep the caller's input order."""

    successes: Tuple[ScrapedProduct, ...] = ()
    failures: Tuple[FailedProduct, ...] = ()

    @property
    def success_count(self) -> int:
        return len(self.successes)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def total_processed(self) -> int:
        return self.success_count + self.failure_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "successes": [{"url": s.url, "product": s.product.to_dict()} for s in self.successes],
            "failures": [
                {"url": f.url, "code": f.error.code, "message": f.message, "status_code": f.error.status_code}
                for f in self.failures
            ],
            "total_processed": self.total_processed,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
        }
