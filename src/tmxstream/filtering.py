"""Removal of ``note`` and ``prop`` elements."""

from __future__ import annotations

from pathlib import Path

from tmxstream import tmx
from tmxstream.config import FilterOptions
from tmxstream.context import DocumentContext
from tmxstream.engine import TransformPolicy, check_destination, check_source, transform
from tmxstream.serializer import XML_DECLARATION, escape_text, render_close_tag, render_open_tag
from tmxstream.sink import FileSink
from tmxstream.tokenizer import DEFAULT_CHUNK_SIZE, CloseTag, OpenTag, Text


class FilterPolicy(TransformPolicy):
    """Pass everything through except excluded ``note``/``prop`` subtrees.

    Only one exclusion is active at a time; it ends at the close tag with
    the same name as the element that started it.  ``note`` and ``prop``
    never nest inside themselves in TMX.
    """

    def __init__(self, sink: FileSink, options: FilterOptions) -> None:
        self._sink = sink
        self._options = options
        self._excluded: str | None = None

    def _excludes(self, tag: OpenTag) -> bool:
        if tag.local == tmx.NOTE:
            return not self._options.keep_notes
        if tag.local == tmx.PROP:
            return tag.attributes.get(tmx.PROP_TYPE) not in self._options.keep_prop_types
        return False

    def open_tag(self, tag: OpenTag, context: DocumentContext) -> None:
        if self._excluded is None and self._excludes(tag):
            self._excluded = tag.name
        if self._excluded is None:
            self._sink.write(render_open_tag(tag))

    def text(self, text: Text, context: DocumentContext) -> None:
        if self._excluded is None:
            self._sink.write(escape_text(text.content))

    def close_tag(self, tag: CloseTag, context: DocumentContext) -> None:
        if self._excluded is None:
            self._sink.write(render_close_tag(tag))
        elif tag.name == self._excluded:
            self._excluded = None


def remove_info_elements_from_file(
    source: str | Path,
    destination: str | Path,
    options: FilterOptions,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Path:
    source = check_source(source)
    destination = check_destination(source, destination)
    with FileSink(destination) as sink:
        sink.write(XML_DECLARATION)
        transform(source, FilterPolicy(sink, options), chunk_size=chunk_size)
    return sink.path
