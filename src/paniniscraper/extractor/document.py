"""
BeautifulSoup-backed document handle.

Extractors only see this small surface (find_first, find_all, text, attr), so
the parser backing it can change without touching any probe.
"""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

_STYLE_DECL_RE = re.compile(r"\s*([-\w]+)\s*:\s*([^;]*)")


class HtmlNode:
    """A parsed element."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def find_first(self, selector: str) -> Optional[HtmlNode]:
        tag = self._tag.select_one(selector)
        return HtmlNode(tag) if tag is not None else None

    def find_all(self, selector: str) -> List[HtmlNode]:
        return [HtmlNode(tag) for tag in self._tag.select(selector)]

    def text(self, separator: str = "") -> str:
        return self._tag.get_text(separator)

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def source(self) -> str:
        """Raw character content, e.g. the body of a <script>."""
        return self._tag.string or ""

    def style(self, prop: str) -> Optional[str]:
        """Value of a property declared in the inline style attribute."""
        declarations = self.attr("style") or ""
        for chunk in declarations.split(";"):
            match = _STYLE_DECL_RE.match(chunk)
            if match and match.group(1).lower() == prop.lower():
                return match.group(2).strip().lower()
        return None

    @property
    def name(self) -> str:
        return self._tag.name

    def __repr__(self) -> str:
        return f"<HtmlNode {self._tag.name}>"


class HtmlDocument(HtmlNode):
    """A whole page."""

    __slots__ = ()

    def __init__(self, html: str) -> None:
        super().__init__(BeautifulSoup(html, "html.parser"))

    def page_text(self) -> str:
        """Text of <body>, or of the whole document when there is no body."""
        body = self._tag.body
        return (body if body is not None else self._tag).get_text(" ")
