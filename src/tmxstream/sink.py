"""Append-only output destinations.

Both sinks are context managers and are closed on every exit path,
including tokenizer failures.  Partially written files are left in place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from tmxstream.errors import FileProcessingError

logger = logging.getLogger(__name__)


class FileSink:
    """A single UTF-8 output file, parent directories created on open."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._file: BinaryIO | None = None

    def open(self) -> FileSink:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "wb")
        except OSError as exc:
            raise FileProcessingError(self.path, "write", exc.strerror or str(exc)) from exc
        logger.info("Output to %s", self.path)
        return self

    def write(self, text: str) -> None:
        if not text:
            return
        if self._file is None:
            raise ValueError(f"{self.path} is not open")
        try:
            self._file.write(text.encode("utf-8"))
        except OSError as exc:
            raise FileProcessingError(self.path, "write", exc.strerror or str(exc)) from exc

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> FileSink:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()


class RotatingFileSink:
    """Numbered destinations ``<stem>-1<suffix>``, ``<stem>-2<suffix>``, ...

    Rotation happens only when the caller asks for it, which the split
    policy does at ``tu`` boundaries.
    """

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path)
        self.index = 0
        self.paths: list[Path] = []
        self._current: FileSink | None = None

    def path_for(self, index: int) -> Path:
        base = self.base_path
        return base.with_name(f"{base.stem}-{index}{base.suffix}")

    def open(self) -> RotatingFileSink:
        self._open_next()
        return self

    def _open_next(self) -> None:
        self.index += 1
        path = self.path_for(self.index)
        logger.info("Splitting into %s...", path)
        self._current = FileSink(path).open()
        self.paths.append(path)

    def write(self, text: str) -> None:
        if self._current is None:
            raise ValueError(f"{self.base_path} is not open")
        self._current.write(text)

    def rotate(self) -> None:
        """Close the current destination and open the next one."""
        self.close()
        self._open_next()

    def discard_current(self) -> None:
        """Close and delete the current destination."""
        if self._current is None:
            return
        path = self._current.path
        self.close()
        path.unlink(missing_ok=True)
        self.paths.remove(path)
        logger.debug("Removed empty split file %s", path)

    def close(self) -> None:
        if self._current is not None:
            self._current.close()
            self._current = None

    def __enter__(self) -> RotatingFileSink:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()
