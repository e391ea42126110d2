"""
Record assembly: run every field extractor and build a ProductRecord.
"""

from __future__ import annotations

import time
from typing import Optional

import structlog

from paniniscraper.config.config import SiteConfig
from paniniscraper.errors import MissingFieldError
from paniniscraper.models import ProductRecord

from .availability import extract_pre_order_status, extract_stock_status
from .details import Clock, extract_contributors, extract_format, extract_identifier
from .document import HtmlDocument
from .image import extract_image_url
from .models import NotFound
from .pricing import extract_prices
from .title import extract_title

logger = structlog.get_logger(__name__)


def assemble_record(
    doc: HtmlDocument,
    url: str,
    site: Optional[SiteConfig] = None,
    clock: Clock = time.time,
) -> ProductRecord:
    """
    Extract every field from ``doc`` and construct the record.

    Raises:
        MissingFieldError: when the title or the price cannot be located.
        RecordValidationError: when the extracted values violate a record invariant.
    """
    site = site or SiteConfig()

    title = extract_title(doc)
    if isinstance(title, NotFound):
        raise MissingFieldError(title.field)

    prices = extract_prices(doc)
    if isinstance(prices, NotFound):
        raise MissingFieldError(prices.field)

    is_pre_order = extract_pre_order_status(doc)
    in_stock = extract_stock_status(doc)
    image_url = extract_image_url(doc, site.base_url)
    product_format = extract_format(doc)
    contributors = extract_contributors(doc)
    product_id = extract_identifier(doc, url, id_prefix=site.id_prefix, clock=clock)

    logger.debug(
        "Assembled product record",
        url=url,
        product_id=product_id,
        has_image=bool(image_url),
        contributors=len(contributors),
    )

    return ProductRecord(
        title=title.value,
        full_price=prices.value.full_price,
        current_price=prices.value.current_price,
        in_stock=in_stock,
        is_pre_order=is_pre_order,
        image_url=image_url,
        source_url=url,
        format=product_format,
        contributors=contributors,
        product_id=product_id,
    )
