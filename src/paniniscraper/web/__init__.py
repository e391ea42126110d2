"""HTTP API for product extraction."""

from .main import create_app

__all__ = ["create_app"]
