"""Storefront product service.

This package contains the product catalogue API (FastAPI + SQLModel), its
cookie-session authentication, and an async client that mirrors the
single-page app's HTTP client, auth store and router guard.
"""

__version__ = "0.1.0"
