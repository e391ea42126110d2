"""
HTTP client for fetching product pages with a browser-like request profile.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import aiohttp
import structlog

from paniniscraper.config.config import HttpConfig
from paniniscraper.errors import TransportError
from paniniscraper.observability.metrics import observe

logger = structlog.get_logger(__name__)

DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
    "Accept-Encoding": "gzip, deflate, br",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
}


class HttpClient:
    """Single-request HTTP client. No retries, no internal concurrency."""

    def __init__(self, config: Optional[HttpConfig] = None) -> None:
        self.config = config or HttpConfig()
        self.session: Optional[aiohttp.ClientSession] = None
        self._requests = 0
        self._failures = 0

        logger.debug(
            "HTTP client initialized",
            timeout_ms=self.config.timeout_ms,
            user_agent=self.config.user_agent,
            proxy=self.config.proxy.url if self.config.proxy else None,
        )

    def build_headers(self) -> Dict[str, str]:
        """Default browser headers, then custom headers, with the configured User-Agent first."""
        return {"User-Agent": self.config.user_agent, **DEFAULT_HEADERS, **self.config.headers}

    def _request_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "headers": self.build_headers(),
            "timeout": aiohttp.ClientTimeout(total=self.config.timeout_ms / 1000),
        }
        proxy = self.config.proxy
        if proxy:
            kwargs["proxy"] = proxy.url
            if proxy.auth:
                kwargs["proxy_auth"] = aiohttp.BasicAuth(proxy.auth.username, proxy.auth.password)
        return kwargs

    async def initialize(self) -> None:
        """Open the underlying session. Called lazily by fetch()."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
            logger.debug("HTTP client session initialized")

    async def close(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None
            logger.debug("HTTP client closed")

    async def __aenter__(self) -> "HttpClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> str:
        """
        GET the URL and return the decoded body.

        Raises:
            TransportError: for status >= 400, timeouts and connection errors.
        """
        await self.initialize()
        assert self.session is not None

        self._requests += 1
        start_time = time.monotonic()
        try:
            async with self.session.get(url, **self._request_kwargs()) as response:
                if response.status >= 400:
                    raise TransportError(
                        f"HTTP request failed: {response.reason or 'error'} ({response.status})",
                        status_code=response.status,
                    )
                body = await response.text(errors="replace")
        except TransportError:
            self._failures += 1
            raise
        except asyncio.TimeoutError as e:
            self._failures += 1
            raise TransportError(f"HTTP request failed: timeout of {self.config.timeout_ms}ms exceeded (unknown)") from e
        except aiohttp.ClientError as e:
            self._failures += 1
            raise TransportError(f"HTTP request failed: {e} (unknown)") from e
        finally:
            observe("fetch_seconds", time.monotonic() - start_time)

        logger.debug("Fetched page", url=url, status=response.status, size=len(body))
        return body

    def update_config(self, config: HttpConfig) -> None:
        """Merge timeout, headers and user agent into the live configuration."""
        fields_set = config.model_fields_set
        updates: Dict[str, Any] = {}
        if "timeout_ms" in fields_set:
            updates["timeout_ms"] = config.timeout_ms
        if config.headers:
            updates["headers"] = {**self.config.headers, **config.headers}
        if "user_agent" in fields_set:
            updates["user_agent"] = config.user_agent
        if "proxy" in fields_set:
            updates["proxy"] = config.proxy
        self.config = self.config.model_copy(update=updates)
        logger.info("HTTP client configuration updated", fields=sorted(updates))

    def get_stats(self) -> Dict[str, Any]:
        return {
            "requests": self._requests,
            "failures": self._failures,
            "session_open": self.session is not None and not self.session.closed,
        }
