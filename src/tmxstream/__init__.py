"""Streaming tools for large TMX (Translation Memory eXchange) files."""

from __future__ import annotations

from tmxstream.batch import (
    file_stats,
    remove_info_elements,
    search_replace_attributes,
    split_files_by_tu_count,
)
from tmxstream.errors import ConfigurationError, FileProcessingError, TmxStreamError

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "FileProcessingError",
    "TmxStreamError",
    "file_stats",
    "remove_info_elements",
    "search_replace_attributes",
    "split_files_by_tu_count",
]
