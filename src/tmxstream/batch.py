"""Batch operations: discover files under a working directory and process
them one at a time.

Files are processed strictly in sequence.  With ``on_error="stop"`` the
first :class:`FileProcessingError` propagates and ends the batch; with
``on_error="continue"`` it is logged, recorded in
:attr:`BatchResult.errors`, and the next file is processed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from tmxstream.config import (
    ON_ERROR_STOP,
    BatchOptions,
    FilterOptions,
    RewriteOptions,
    SplitOptions,
)
from tmxstream.errors import FileProcessingError
from tmxstream.filtering import remove_info_elements_from_file
from tmxstream.models import BatchResult
from tmxstream.rewrite import search_replace_attributes_in_file
from tmxstream.split import split_file_by_tu_count
from tmxstream.stats import collect_file_stats

logger = logging.getLogger(__name__)


def discover_files(cwd: str | Path, patterns: list[str], ignore: list[str] | None = None) -> list[Path]:
    """Return regular files under *cwd* matching any of *patterns*.

    Ignore patterns are globbed the same way and subtracted.  Paths are
    relative to *cwd* and sorted.
    """
    cwd = Path(cwd)
    matched: set[Path] = set()
    for pattern in patterns:
        matched.update(p for p in cwd.glob(pattern) if p.is_file())
    for pattern in ignore or []:
        matched.difference_update(cwd.glob(pattern))
    return sorted(p.relative_to(cwd) for p in matched)


def _run(batch: BatchOptions, process: Callable[[Path], Any]) -> BatchResult:
    files = discover_files(batch.cwd, batch.file_match, batch.file_ignore)
    logger.info("Found %d file(s)", len(files))

    result = BatchResult()
    for relative in files:
        logger.info("Processing %s...", relative.as_posix())
        try:
            value = process(relative)
        except FileProcessingError as exc:
            if batch.on_error == ON_ERROR_STOP:
                raise
            logger.error("Skipping %s: %s", relative.as_posix(), exc)
            result.errors.append(exc)
            continue
        result.files[relative.as_posix()] = value
    return result


def file_stats(batch: BatchOptions) -> BatchResult:
    """Collect :class:`FileStats` for every matched file."""
    batch.validate()
    return _run(
        batch,
        lambda relative: collect_file_stats(batch.cwd / relative, chunk_size=batch.chunk_size),
    )


def remove_info_elements(batch: BatchOptions, options: FilterOptions | None = None) -> BatchResult:
    """Write copies of the matched files without ``note``/``prop`` elements."""
    options = options or FilterOptions()
    batch.validate(require_output=True)
    options.validate()
    return _run(
        batch,
        lambda relative: [
            remove_info_elements_from_file(
                batch.cwd / relative,
                batch.output_root / relative,
                options,
                chunk_size=batch.chunk_size,
            )
        ],
    )


def search_replace_attributes(batch: BatchOptions, options: RewriteOptions) -> BatchResult:
    """Write copies of the matched files with attribute values rewritten."""
    batch.validate(require_output=True)
    options.validate()
    return _run(
        batch,
        lambda relative: [
            search_replace_attributes_in_file(
                batch.cwd / relative,
                batch.output_root / relative,
                options,
                chunk_size=batch.chunk_size,
            )
        ],
    )


def split_files_by_tu_count(batch: BatchOptions, options: SplitOptions | None = None) -> BatchResult:
    """Split every matched file into numbered files of at most N units."""
    options = options or SplitOptions()
    batch.validate(require_output=True)
    options.validate()
    return _run(
        batch,
        lambda relative: split_file_by_tu_count(
            batch.cwd / relative,
            batch.output_root / relative,
            options,
            chunk_size=batch.chunk_size,
        ),
    )
