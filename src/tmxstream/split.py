"""Splitting a TMX file into numbered files of at most N ``tu`` each."""

from __future__ import annotations

from pathlib import Path

from tmxstream import tmx
from tmxstream.config import SplitOptions
from tmxstream.context import DocumentContext
from tmxstream.engine import TransformPolicy, check_source, transform
from tmxstream.serializer import XML_DECLARATION, escape_text, render_close_tag, render_open_tag
from tmxstream.sink import RotatingFileSink
from tmxstream.tokenizer import DEFAULT_CHUNK_SIZE, CloseTag, OpenTag, Text


class SplitPolicy(TransformPolicy):
    """Re-serialize into *sink*, rotating before the unit that overflows.

    The root open tag and the whole ``header`` subtree are cached as they
    stream past and replayed at the top of every later file, followed by
    a fresh ``body`` open tag.  The overflowing ``tu`` is the first unit
    of the new file.
    """

    def __init__(self, sink: RotatingFileSink, max_tu_count: int) -> None:
        self._sink = sink
        self._max_tu_count = max_tu_count
        self.tu_count = 0
        self._root_name = tmx.TMX
        self._root_xml = f'<{tmx.TMX} version="{tmx.TMX_VERSION}">'
        self._body_name = tmx.BODY
        self._body_xml = f"<{tmx.BODY}>"
        self._header_parts: list[str] = []

    @property
    def header_xml(self) -> str:
        return "".join(self._header_parts)

    def open_tag(self, tag: OpenTag, context: DocumentContext) -> None:
        markup = render_open_tag(tag)
        name = tag.local

        if name == tmx.TMX and context.inside_tmx:
            self._root_name, self._root_xml = tag.name, markup
        elif name == tmx.BODY and context.inside_body:
            self._body_name, self._body_xml = tag.name, render_open_tag(
                OpenTag(tag.name, tag.attributes)
            )

        if context.inside_header:
            self._header_parts.append(markup)

        if name == tmx.TU and context.inside_tu:
            self.tu_count += 1
            if self.tu_count > self._max_tu_count:
                self._rotate()
                self.tu_count = 1

        self._sink.write(markup)

    def text(self, text: Text, context: DocumentContext) -> None:
        markup = escape_text(text.content)
        if context.inside_header:
            self._header_parts.append(markup)
        self._sink.write(markup)

    def close_tag(self, tag: CloseTag, context: DocumentContext) -> None:
        markup = render_close_tag(tag)
        if context.inside_header:
            self._header_parts.append(markup)
        self._sink.write(markup)

    def end(self, context: DocumentContext) -> None:
        if self._sink.index > 1 and self.tu_count == 0:
            self._sink.discard_current()

    def _rotate(self) -> None:
        self._sink.write(f"</{self._body_name}></{self._root_name}>")
        self._sink.rotate()
        self._sink.write(XML_DECLARATION + self._root_xml + self.header_xml + self._body_xml)


def split_file_by_tu_count(
    source: str | Path,
    destination: str | Path,
    options: SplitOptions,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> list[Path]:
    """Split *source* into ``<stem>-1<suffix>``, ``<stem>-2<suffix>``, ...

    *destination* is the un-numbered base path.  Returns the written files.
    """
    source = check_source(source)
    options.validate()
    with RotatingFileSink(destination) as sink:
        sink.write(XML_DECLARATION)
        transform(source, SplitPolicy(sink, options.max_tu_count), chunk_size=chunk_size)
    return list(sink.paths)
