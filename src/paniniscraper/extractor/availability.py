"""
Stock and pre-order flags.

The two flags are independent: a pre-order item is often also reported as
in stock.
"""

from __future__ import annotations

from typing import Optional

from .document import HtmlDocument
from .models import Found
from .probes import first_found

OUT_OF_STOCK_PHRASES = (
    "produto indisponível",
    "fora de estoque",
    "esgotado",
    "sem estoque",
    "indisponível",
)

PRE_ORDER_PHRASES = ("pré-venda", "pre-order", "pré-lançamento")

PRESALE_LABEL_SELECTOR = ".infobase-label-presale"

AVAILABILITY_SELECTORS = (
    ".product-availability",
    ".availability-info",
    ".product-status",
    ".status-info",
    ".preorder-info",
)

PRODUCT_AREA_SELECTOR = ".product-main, .product-info, .product-details"


def _mentions_pre_order(text: str) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in PRE_ORDER_PHRASES)


def _presale_label(doc: HtmlDocument) -> Optional[bool]:
    for label in doc.find_all(PRESALE_LABEL_SELECTOR):
        if "pré-venda" in label.text().lower() and label.style("display") != "none":
            return True
    return None


def _availability_containers(doc: HtmlDocument) -> Optional[bool]:
    for selector in AVAILABILITY_SELECTORS:
        if any(_mentions_pre_order(node.text()) for node in doc.find_all(selector)):
            return True
    return None


def _product_area(doc: HtmlDocument) -> Optional[bool]:
    text = "".join(node.text() for node in doc.find_all(PRODUCT_AREA_SELECTOR))
    return True if _mentions_pre_order(text) else None


PRE_ORDER_PROBES = (_presale_label, _availability_containers, _product_area)


def extract_pre_order_status(doc: HtmlDocument) -> bool:
    """True when any pre-order indicator is present in the product area."""
    result = first_found(PRE_ORDER_PROBES, doc, "pre_order")
    return isinstance(result, Found) and result.value


def extract_stock_status(doc: HtmlDocument) -> bool:
    """False when the page text carries an out-of-stock phrase."""
    page_text = doc.page_text().lower()
    return not any(phrase in page_text for phrase in OUT_OF_STOCK_PHRASES)
