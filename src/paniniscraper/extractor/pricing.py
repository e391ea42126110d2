"""
Full and current price extraction.

Only the first element matched by each selector is read. Within a selector
group the first non-zero parse wins.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .document import HtmlDocument
from .models import FieldResult, Found, NotFound, Prices
from .price import parse_price

FULL_PRICE_SELECTORS = (
    ".old-price",
    ".price-original",
    ".price-old",
    ".was-price",
    ".regular-price",
    ".price.old",
)

CURRENT_PRICE_SELECTORS = (
    ".price-current",
    ".current-price",
    ".new-price",
    ".price-sale",
    ".sale-price",
    ".special-price",
    ".price.new",
    ".price",
)

GENERIC_PRICE_SELECTORS = (
    ".product-price",
    '[data-testid="price"]',
    ".value",
    ".amount",
    ".price-box .price",
)


def _first_price(doc: HtmlDocument, selectors: Iterable[str]) -> Optional[float]:
    for selector in selectors:
        node = doc.find_first(selector)
        if node is None:
            continue
        value = parse_price(node.text())
        if value > 0:
            return value
    return None


def extract_prices(doc: HtmlDocument) -> FieldResult[Prices]:
    current = _first_price(doc, CURRENT_PRICE_SELECTORS)
    if current is None:
        current = _first_price(doc, GENERIC_PRICE_SELECTORS)
    if current is None:
        return NotFound("price")

    full = _first_price(doc, FULL_PRICE_SELECTORS)
    return Found(Prices(full_price=full if full is not None else current, current_price=current))
