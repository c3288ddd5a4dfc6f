"""Ingestion ports."""

from .http import HttpResponse, IHttpClient  # noqa: F401

__all__ = [
    "IHttpClient",
    "HttpResponse",
]
