"""
Localized (pt-BR) currency parsing.
"""

from __future__ import annotations

import re
from typing import Optional

# Digits with '.' thousands separators and an optional ',' decimal part.
_PRICE_RE = re.compile(r"\d[\d.]*(?:,\d+)?")


def parse_price(text: Optional[str]) -> float:
    """
    Parse the first price found in ``text``.

    ``"R$ 1.234,56"`` becomes ``1234.56``. Returns ``0.0`` when the text is
    empty or holds no digits, which callers treat as "not found".
    """
    if not text:
        return 0.0
    match = _PRICE_RE.search(text)
    if not match:
        return 0.0
    return float(match.group(0).replace(".", "").replace(",", "."))
