"""
Fields read from the product details table: format, contributors and the
product identifier.
"""

from __future__ import annotations

import re
import time
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlparse

from paniniscraper.models import FORMAT_UNSPECIFIED

from .document import HtmlDocument
from .models import Found
from .probes import Probe, first_found, labelled_cell

DETAIL_TABLE_SELECTOR = (
    "table.additional-attributes, #product-attribute-specs-table, "
    ".product-details table, .details-table, .product-info table"
)

FORMAT_LABELS = ("encadernação", "formato")
CONTRIBUTOR_LABELS = ("autor", "roteiro", "arte")
IDENTIFIER_LABELS = ("referência", "código", "sku")

ID_SELECTORS = (
    "[data-product-id]",
    "[data-sku]",
    ".product-sku",
    ".sku",
    ".product-code",
    ".reference",
    ".codigo-produto",
)
ID_ATTRIBUTES = ("data-product-id", "data-sku")

REFERENCE_RE = re.compile(r"referência[:\s]*([A-Z0-9_-]+)", re.IGNORECASE)

MAX_CONTRIBUTOR_LENGTH = 100

Clock = Callable[[], float]


def detail_rows(doc: HtmlDocument) -> List[Tuple[str, str]]:
    """
    (label, value) pairs from the details table(s), in document order.

    A row is labelled by its <th>, by the ``data-th`` attribute of its cell,
    or by its first cell when it has two or more cells.
    """
    rows: List[Tuple[str, str]] = []
    for table in doc.find_all(DETAIL_TABLE_SELECTOR):
        for row in table.find_all("tr"):
            header = row.find_first("th")
            labelled = row.find_first("td[data-th]")
            if header is not None:
                cell = row.find_first("td")
                label, value = header.text(), cell.text() if cell is not None else ""
            elif labelled is not None:
                label, value = labelled.attr("data-th") or "", labelled.text()
            else:
                cells = row.find_all("td")
                if len(cells) < 2:
                    continue
                label, value = cells[0].text(), cells[-1].text()
            label, value = label.strip(), value.strip()
            if value and value != label:
                rows.append((label, value))
    return rows


def _row_labelled(*keywords: str) -> Probe[str]:
    def probe(doc: HtmlDocument) -> Optional[str]:
        for label, value in detail_rows(doc):
            lowered = label.lower()
            if any(keyword in lowered for keyword in keywords):
                return value
        return None

    return probe


FORMAT_PROBES = (labelled_cell("Encadernação"), _row_labelled(*FORMAT_LABELS))
CONTRIBUTOR_PROBES = (labelled_cell("Autores"), _row_labelled(*CONTRIBUTOR_LABELS))


def extract_format(doc: HtmlDocument) -> str:
    result = first_found(FORMAT_PROBES, doc, "format")
    return result.value if isinstance(result, Found) else FORMAT_UNSPECIFIED


def split_contributors(raw: str) -> Tuple[str, ...]:
    """Comma-separated names, trimmed and de-duplicated in first-seen order."""
    names: List[str] = []
    for token in raw.split(","):
        name = token.strip()
        if name and len(name) < MAX_CONTRIBUTOR_LENGTH and name not in names:
            names.append(name)
    return tuple(names)


def extract_contributors(doc: HtmlDocument) -> Tuple[str, ...]:
    result = first_found(CONTRIBUTOR_PROBES, doc, "contributors")
    if not isinstance(result, Found):
        return ()
    return split_contributors(result.value)


def _id_locations(doc: HtmlDocument) -> Optional[str]:
    for selector in ID_SELECTORS:
        node = doc.find_first(selector)
        if node is None:
            continue
        for attribute in ID_ATTRIBUTES:
            value = (node.attr(attribute) or "").strip()
            if value:
                return value
        text = node.text().strip()
        if text:
            return text
    return None


def _reference_in_text(doc: HtmlDocument) -> Optional[str]:
    match = REFERENCE_RE.search(doc.page_text())
    return match.group(1) if match else None


IDENTIFIER_PROBES = (
    labelled_cell("Referência"),
    _id_locations,
    _row_labelled(*IDENTIFIER_LABELS),
    _reference_in_text,
)


def identifier_from_url(url: str) -> str:
    """Last path segment without its extension, or '' for a bare origin."""
    segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    return segment.split(".", 1)[0]


def extract_identifier(
    doc: HtmlDocument,
    url: str,
    *,
    id_prefix: str = "panini",
    clock: Clock = time.time,
) -> str:
    """
    Product identifier from the page, falling back to the URL and finally to
    ``"<id_prefix>-<epoch millis>"``.
    """
    result = first_found(IDENTIFIER_PROBES, doc, "id")
    if isinstance(result, Found):
        return result.value
    return identifier_from_url(url) or f"{id_prefix}-{int(clock() * 1000)}"
