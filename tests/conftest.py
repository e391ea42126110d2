"""
Shared fixtures for the paniniscraper test suite.

Provides a recording fake transport, a fixed clock and a small builder for
product pages so tests can describe only the markup they care about.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import pytest
import structlog

from paniniscraper.config.config import SiteConfig
from paniniscraper.extractor.document import HtmlDocument
from paniniscraper.pipeline import ExtractionPipeline

from tests.helpers import StubFetcher

FIXTURES_DIR = Path(__file__).parent / "fixtures"

FIXED_EPOCH = 1_700_000_000.0


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


def build_page(
    title: Optional[str] = "Batman: Ano Um",
    price: Optional[str] = "R$ 29,90",
    old_price: Optional[str] = None,
    body: str = "",
    head: str = "",
) -> str:
    """Minimal product page; pass None to leave a field out."""
    parts = []
    if title is not None:
        parts.append(f'<h1 class="product-title">{title}</h1>')
    if old_price is not None:
        parts.append(f'<span class="old-price">{old_price}</span>')
    if price is not None:
        parts.append(f'<span class="price">{price}</span>')
    parts.append(body)
    return f"<html><head>{head}</head><body>{''.join(parts)}</body></html>"


@pytest.fixture
def page_builder() -> Callable[..., str]:
    return build_page


@pytest.fixture
def make_doc() -> Callable[[str], HtmlDocument]:
    return HtmlDocument


@pytest.fixture
def product_page_html() -> str:
    """A captured-style Panini product page."""
    return (FIXTURES_DIR / "product_page.html").read_text(encoding="utf-8")


@pytest.fixture
def fixed_clock() -> Callable[[], float]:
    return lambda: FIXED_EPOCH


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def pipeline(stub_fetcher, fixed_clock) -> ExtractionPipeline:
    return ExtractionPipeline(stub_fetcher, site=SiteConfig(), clock=fixed_clock)


@pytest.fixture
def restore_logging():
    """Undo configure_logging() so later tests keep pytest's own handlers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers, root.level = handlers, level
    structlog.reset_defaults()
