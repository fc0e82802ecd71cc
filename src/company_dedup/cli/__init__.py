"""Command-line interface for company_dedup."""

from .main import app

__all__ = ["app"]
