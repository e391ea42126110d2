"""
Error taxonomy for product extraction.

Public errors all derive from ScrapingFailedError and carry the offending URL.
The remaining classes are raised internally and re-classified by the pipeline.
"""

from __future__ import annotations

from typing import Optional


class ScrapingFailedError(Exception):
    """Catch-all for transport, parse and validation failures."""

    code = "SCRAPING_ERROR"

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code


class ProductNotFoundError(ScrapingFailedError):
    """Page was reachable but is not a recognizable product page."""

    code = "PRODUCT_NOT_FOUND"

    def __init__(self, url: str) -> None:
        super().__init__("Product not found or page structure has changed", url, 404)


class InvalidUrlError(ScrapingFailedError):
    """URL failed the shape/domain check. No network I/O was attempted."""

    code = "INVALID_URL"

    def __init__(self, url: object) -> None:
        super().__init__("Invalid or malformed URL provided", url if isinstance(url, str) else repr(url))


class TransportError(Exception):
    """Raised by the HTTP client for network and protocol failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingFieldError(Exception):
    """A required field (title or price) could not be located."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Could not find product {field}")
        self.field = field


class RecordValidationError(ValueError):
    """A ProductRecord invariant was violated at construction time."""
