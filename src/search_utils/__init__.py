"""Shared utilities: logging, settings, base models."""

from search_utils.base import MutableModel, StrictModel
from search_utils.logging import get_logger
from search_utils.settings import Settings, get_settings

__all__ = ["MutableModel", "Settings", "StrictModel", "get_logger", "get_settings"]
