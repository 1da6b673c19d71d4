"""HTTP surface: Flask application exposing the discovery operations under /api."""

from .server import create_app

__all__ = ["create_app"]
