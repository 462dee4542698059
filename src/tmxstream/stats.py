"""Header, ``tu`` and per-language ``tuv`` statistics."""

from __future__ import annotations

from pathlib import Path

from tmxstream import tmx
from tmxstream.context import DocumentContext
from tmxstream.engine import TransformPolicy, check_source, transform
from tmxstream.models import FileStats
from tmxstream.tokenizer import DEFAULT_CHUNK_SIZE, OpenTag


class StatsPolicy(TransformPolicy):
    """Counts units and variants; emits nothing."""

    def __init__(self) -> None:
        self.stats = FileStats()

    def open_tag(self, tag: OpenTag, context: DocumentContext) -> None:
        name = tag.local
        if name == tmx.HEADER and context.inside_header:
            for key, value in tag.attributes.items():
                self.stats.header[key] = value or ""
        elif name == tmx.TU and context.inside_tu:
            self.stats.tu_count += 1
        elif name == tmx.TUV and context.inside_tuv:
            lang = context.tuv_language
            self.stats.tuv_counts[lang] = self.stats.tuv_counts.get(lang, 0) + 1


def collect_file_stats(path: str | Path, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> FileStats:
    """Stream *path* once and return its statistics, including byte size."""
    path = check_source(path)
    policy = StatsPolicy()
    transform(path, policy, chunk_size=chunk_size)
    policy.stats.size = path.stat().st_size
    return policy.stats
