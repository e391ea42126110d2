"""
paniniscraper: structured product extraction for Panini Brasil pages.
"""

from .config import HttpConfig, ProxyAuth, ProxyConfig, ScraperSettings, SiteConfig
from .errors import InvalidUrlError, ProductNotFoundError, ScrapingFailedError
from .models import FORMAT_UNSPECIFIED, BatchResult, FailedProduct, ProductRecord, ScrapedProduct
from .scraper import ReusableExtractor, extract_many, extract_one, make_extractor

__version__ = "0.1.0"

__all__ = [
    "FORMAT_UNSPECIFIED",
    "BatchResult",
    "FailedProduct",
    "HttpConfig",
    "InvalidUrlError",
    "ProductNotFoundError",
    "ProductRecord",
    "ProxyAuth",
    "ProxyConfig",
    "ReusableExtractor",
    "ScrapedProduct",
    "ScraperSettings",
    "ScrapingFailedError",
    "SiteConfig",
    "__version__",
    "extract_many",
    "extract_one",
    "make_extractor",
]
