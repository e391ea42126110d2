"""Product title."""

from __future__ import annotations

from .document import HtmlDocument
from .models import FieldResult
from .probes import first_found, first_text

TITLE_SELECTORS = (
    ".product-title",
    ".product-name",
    "h1.title",
    "h1",
    ".page-title",
    '[data-testid="product-title"]',
)

TITLE_PROBES = tuple(first_text(selector) for selector in TITLE_SELECTORS)


def extract_title(doc: HtmlDocument) -> FieldResult[str]:
    return first_found(TITLE_PROBES, doc, "title")
