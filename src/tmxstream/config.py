"""Options for the batch operations and settings-file loading.

Options are plain dataclasses handed to the core as read-only values.
Each has a ``validate()`` that raises :class:`ConfigurationError`; batch
functions call it before touching any file.

Defaults live in the bundled ``default_settings.json``; a user settings
file can override any of them (see :func:`load_settings`).
"""

from __future__ import annotations

import importlib.resources
import json
import re
from dataclasses import dataclass, field
from pathlib import Path

from tmxstream.errors import ConfigurationError
from tmxstream.tokenizer import DEFAULT_CHUNK_SIZE

ON_ERROR_STOP = "stop"
ON_ERROR_CONTINUE = "continue"
ON_ERROR_POLICIES = (ON_ERROR_STOP, ON_ERROR_CONTINUE)

DEFAULT_MAX_TU_COUNT = 100000

# Search flag letter -> re flag.  "g" is handled separately (replace all).
SEARCH_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}
GLOBAL_FLAG = "g"

# Operation sections in the settings file
SECTION_REMOVE = "remove_info_elements"
SECTION_REPLACE = "search_replace_attributes"
SECTION_SPLIT = "split_files_by_tu_count"


# ── Settings files ──────────────────────────────────────────────


def _load_defaults() -> dict:
    """Load the bundled default settings using importlib.resources.

    Works whether the package is run from source or installed as a wheel.
    """
    ref = importlib.resources.files("tmxstream").joinpath("default_settings.json")
    with importlib.resources.as_file(ref) as p:
        with open(p, encoding="utf-8") as f:
            return json.load(f)


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: str | Path | None = None) -> dict:
    """Return the default settings overlaid with the JSON file at *path*."""
    settings = _load_defaults()
    if path is None:
        return settings
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            user = json.load(f)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid settings file {path}: {exc}") from exc
    if not isinstance(user, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")
    return _merge(settings, user)


# ── Option values ───────────────────────────────────────────────


def _as_list(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class BatchOptions:
    """Which files to process, where to write, and what to do on failure."""

    file_match: list[str]
    cwd: Path = field(default_factory=Path.cwd)
    file_ignore: list[str] = field(default_factory=list)
    output_path: Path | None = None
    on_error: str = ON_ERROR_STOP
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        self.file_match = _as_list(self.file_match)
        self.file_ignore = _as_list(self.file_ignore)
        self.cwd = Path(self.cwd)
        if self.output_path is not None:
            self.output_path = Path(self.output_path)

    @property
    def output_root(self) -> Path:
        """Output directory resolved against ``cwd``."""
        if self.output_path is None:
            raise ConfigurationError("An output path is required")
        return self.cwd / self.output_path

    def validate(self, *, require_output: bool = False) -> None:
        if not self.file_match:
            raise ConfigurationError("At least one file match pattern is required")
        for pattern in self.file_match + self.file_ignore:
            if not pattern or Path(pattern).is_absolute():
                raise ConfigurationError(
                    f"Glob patterns must be non-empty and relative to cwd: {pattern!r}"
                )
        if not self.cwd.is_dir():
            raise ConfigurationError(f"Working directory does not exist: {self.cwd}")
        if require_output and self.output_path is None:
            raise ConfigurationError("An output path is required")
        if self.on_error not in ON_ERROR_POLICIES:
            raise ConfigurationError(
                f"on_error must be one of {', '.join(ON_ERROR_POLICIES)}, got {self.on_error!r}"
            )
        if self.chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size}")


@dataclass
class FilterOptions:
    """Which info elements survive ``remove_info_elements``."""

    keep_notes: bool = False
    keep_prop_types: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        self.keep_prop_types = frozenset(_as_list(self.keep_prop_types))

    def validate(self) -> None:
        if not isinstance(self.keep_notes, bool):
            raise ConfigurationError(f"keep_notes must be a boolean, got {self.keep_notes!r}")
        for prop_type in self.keep_prop_types:
            if not isinstance(prop_type, str):
                raise ConfigurationError(f"keep_prop_types must hold strings, got {prop_type!r}")


@dataclass
class RewriteOptions:
    """Attribute search & replace.

    Empty *tag_names* / *attribute_names* match everything; matching is
    case-insensitive.  *replacement_value* uses ``re`` template syntax
    (``\\1``, ``\\g<name>``).  Only the first match in each value is
    replaced unless *search_flags* contains ``g``.
    """

    search_pattern: str
    replacement_value: str
    tag_names: frozenset[str] = frozenset()
    attribute_names: frozenset[str] = frozenset()
    search_flags: str = ""

    def __post_init__(self) -> None:
        self.tag_names = frozenset(n.lower() for n in _as_list(self.tag_names))
        self.attribute_names = frozenset(n.lower() for n in _as_list(self.attribute_names))

    @property
    def replace_count(self) -> int:
        """``count`` argument for ``re.sub``: 0 replaces every match."""
        return 0 if GLOBAL_FLAG in self.search_flags else 1

    def compile(self) -> re.Pattern[str]:
        flags = 0
        for letter in self.search_flags:
            if letter == GLOBAL_FLAG:
                continue
            if letter not in SEARCH_FLAGS:
                raise ConfigurationError(f"Unsupported search flag: {letter!r}")
            flags |= SEARCH_FLAGS[letter]
        try:
            return re.compile(self.search_pattern, flags)
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid search pattern {self.search_pattern!r}: {exc}"
            ) from exc

    def validate(self) -> None:
        pattern = self.compile()
        # The trailing empty alternative always matches, so the template is
        # expanded once against the pattern's groups.  The newline ends a
        # trailing comment under the x flag.
        expander = re.compile(f"{pattern.pattern}\n|", pattern.flags)
        try:
            expander.sub(self.replacement_value, "", count=1)
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid replacement value {self.replacement_value!r}: {exc}"
            ) from exc


@dataclass
class SplitOptions:
    max_tu_count: int = DEFAULT_MAX_TU_COUNT

    def validate(self) -> None:
        if isinstance(self.max_tu_count, bool) or not isinstance(self.max_tu_count, int):
            raise ConfigurationError(f"max_tu_count must be an integer, got {self.max_tu_count!r}")
        if self.max_tu_count < 1:
            raise ConfigurationError(f"max_tu_count must be at least 1, got {self.max_tu_count}")
