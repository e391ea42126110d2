"""
Field extractors for Panini product pages.

Each extractor reads an HtmlDocument and returns either a value or a
NotFound marker; assemble_record turns them into a ProductRecord.
"""

from .assembler import assemble_record
from .availability import extract_pre_order_status, extract_stock_status
from .details import detail_rows, extract_contributors, extract_format, extract_identifier
from .document import HtmlDocument, HtmlNode
from .image import extract_image_url, is_placeholder_image
from .models import Found, NotFound, Prices
from .price import parse_price
from .pricing import extract_prices
from .probes import first_found
from .title import extract_title

__all__ = [
    "Found",
    "HtmlDocument",
    "HtmlNode",
    "NotFound",
    "Prices",
    "assemble_record",
    "detail_rows",
    "extract_contributors",
    "extract_format",
    "extract_identifier",
    "extract_image_url",
    "extract_pre_order_status",
    "extract_prices",
    "extract_stock_status",
    "extract_title",
    "first_found",
    "is_placeholder_image",
    "parse_price",
]
