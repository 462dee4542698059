"""Exception types raised by tmxstream operations."""

from __future__ import annotations

from pathlib import Path


class TmxStreamError(Exception):
    """Base class for all tmxstream errors."""


class ConfigurationError(TmxStreamError, ValueError):
    """Invalid options, detected before any file is processed."""


class FileProcessingError(TmxStreamError):
    """A single file failed at a given stage.

    *stage* is one of ``"read"`` (input missing or unreadable),
    ``"parse"`` (malformed XML) or ``"write"`` (output not writable).
    The original exception is chained as ``__cause__``.
    """

    def __init__(self, path: str | Path, stage: str, message: str) -> None:
        super().__init__(f"{path}: {stage} failed: {message}")
        self.path = Path(path)
        self.stage = stage
        self.message = message
