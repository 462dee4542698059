"""Result types returned by the batch operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tmxstream.errors import FileProcessingError


@dataclass
class FileStats:
    """Statistics for one TMX file.

    ``tuv_counts`` is keyed by the ``xml:lang`` value of each ``tuv``; a
    ``tuv`` without one is counted under ``""``.
    """

    header: dict[str, str] = field(default_factory=dict)
    tu_count: int = 0
    tuv_counts: dict[str, int] = field(default_factory=dict)
    size: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": dict(self.header),
            "body": {
                "tu": {
                    "count": self.tu_count,
                    "tuv": {lang: {"count": n} for lang, n in self.tuv_counts.items()},
                },
            },
            "size": self.size,
        }


@dataclass
class BatchResult:
    """Outcome of a batch run.

    ``files`` maps each successfully processed file (path relative to the
    working directory, forward slashes) to its per-file result: a
    :class:`FileStats` for statistics, the list of written paths for the
    writing operations.  ``errors`` is only populated when the batch was
    run with ``on_error="continue"``.
    """

    files: dict[str, Any] = field(default_factory=dict)
    errors: list[FileProcessingError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def outputs(self) -> list[Path]:
        return [
            path
            for value in self.files.values()
            if isinstance(value, list)
            for path in value
        ]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; statistics are expanded via ``to_dict()``."""
        return {
            name: value.to_dict() if isinstance(value, FileStats) else [str(p) for p in value]
            for name, value in self.files.items()
        }
