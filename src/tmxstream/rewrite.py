"""Regular-expression search & replace over attribute values."""

from __future__ import annotations

from pathlib import Path

from tmxstream.config import RewriteOptions
from tmxstream.context import DocumentContext
from tmxstream.engine import TransformPolicy, check_destination, check_source, transform
from tmxstream.serializer import XML_DECLARATION, escape_text, render_close_tag, render_open_tag
from tmxstream.sink import FileSink
from tmxstream.tokenizer import DEFAULT_CHUNK_SIZE, CloseTag, OpenTag, Text


class RewritePolicy(TransformPolicy):
    """Re-serialize the whole document, rewriting selected attribute values."""

    def __init__(self, sink: FileSink, options: RewriteOptions) -> None:
        self._sink = sink
        self._options = options
        self._pattern = options.compile()
        self._count = options.replace_count

    def _selects_tag(self, name: str) -> bool:
        names = self._options.tag_names
        return not names or name.lower() in names

    def _selects_attribute(self, name: str) -> bool:
        names = self._options.attribute_names
        return not names or name.lower() in names

    def rewrite(self, tag: OpenTag) -> dict[str, str]:
        """Return *tag*'s attributes with matching values substituted."""
        if not self._selects_tag(tag.name):
            return tag.attributes
        return {
            key: (
                self._pattern.sub(self._options.replacement_value, value, count=self._count)
                if self._selects_attribute(key)
                else value
            )
            for key, value in tag.attributes.items()
        }

    def open_tag(self, tag: OpenTag, context: DocumentContext) -> None:
        self._sink.write(render_open_tag(tag, self.rewrite(tag)))

    def text(self, text: Text, context: DocumentContext) -> None:
        self._sink.write(escape_text(text.content))

    def close_tag(self, tag: CloseTag, context: DocumentContext) -> None:
        self._sink.write(render_close_tag(tag))


def search_replace_attributes_in_file(
    source: str | Path,
    destination: str | Path,
    options: RewriteOptions,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Path:
    source = check_source(source)
    destination = check_destination(source, destination)
    options.validate()
    with FileSink(destination) as sink:
        sink.write(XML_DECLARATION)
        transform(source, RewritePolicy(sink, options), chunk_size=chunk_size)
    return sink.path
