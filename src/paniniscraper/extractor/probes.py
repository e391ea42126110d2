"""
Probe combinators.

A probe is a pure function ``(doc) -> value | None``. Extractors declare their
probes as ordered tuples and ``first_found`` walks them in that order, so the
priority of every heuristic is visible in one place.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from .document import HtmlDocument
from .models import FieldResult, Found, NotFound

T = TypeVar("T")

Probe = Callable[[HtmlDocument], Optional[T]]


def first_found(probes: Iterable[Probe[T]], doc: HtmlDocument, field: str) -> FieldResult[T]:
    for probe in probes:
        value = probe(doc)
        if value is not None:
            return Found(value)
    return NotFound(field)


def first_text(selector: str) -> Probe[str]:
    """Stripped text of the first element matching ``selector``, if non-empty."""

    def probe(doc: HtmlDocument) -> Optional[str]:
        node = doc.find_first(selector)
        if node is None:
            return None
        text = node.text().strip()
        return text or None

    probe.__name__ = f"first_text({selector!r})"
    return probe


def labelled_cell(label: str) -> Probe[str]:
    """Text of the details-table cell whose ``data-th`` equals ``label``."""
    return first_text(f'td[data-th="{label}"]')
