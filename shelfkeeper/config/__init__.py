"""Configuration helpers for shelfkeeper."""

from .loader import ReaderConfig, get_reader_config, load_reader_config

__all__ = ["ReaderConfig", "get_reader_config", "load_reader_config"]
