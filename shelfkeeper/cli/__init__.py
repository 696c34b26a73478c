"""Command line interface for shelfkeeper."""

from .main import main

__all__ = ["main"]
