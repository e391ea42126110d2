"""
Protocols for the pluggable seams of the extraction pipeline.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class PageFetcher(Protocol):
    """Transport collaborator: given a URL, return raw HTML or raise."""

    async def fetch(self, url: str) -> str:
        """Fetch the page body as text.

        Raises:
            TransportError: on network or protocol failure
        """
        ...


@runtime_checkable
class DocumentNode(Protocol):
    """Opaque, queryable handle over a parsed HTML element."""

    def find_first(self, selector: str) -> Optional["DocumentNode"]: ...

    def find_all(self, selector: str) -> List["DocumentNode"]: ...

    def text(self) -> str: ...

    def attr(self, name: str) -> Optional[str]: ...
