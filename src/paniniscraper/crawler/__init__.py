"""Page transport."""

from .http_client import DEFAULT_HEADERS, HttpClient

__all__ = ["DEFAULT_HEADERS", "HttpClient"]
