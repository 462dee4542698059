"""Forward-only XML event stream over a TMX file.

Uses lxml's parser-target interface fed in fixed-size chunks, so only the
current chunk and the events it produced are held in memory.  The stream
yields :class:`OpenTag`, :class:`Text`, :class:`CloseTag` and a final
:class:`End`, in document order.

lxml does not tell us whether an element was written as ``<a/>`` or
``<a></a>``; an element with no content between its start and end is
reported as self-closing.  Comments and processing instructions are not
reported.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from lxml import etree

from tmxstream.tmx import XML_NAMESPACE

DEFAULT_CHUNK_SIZE = 64 * 1024

Source = Union[str, Path, BinaryIO]


@dataclass(frozen=True)
class OpenTag:
    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    self_closing: bool = False

    @property
    def local(self) -> str:
        """Tag name without its namespace prefix."""
        return self.name.rpartition(":")[2]


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class CloseTag:
    name: str
    self_closing: bool = False

    @property
    def local(self) -> str:
        return self.name.rpartition(":")[2]


@dataclass(frozen=True)
class End:
    pass


Event = Union[OpenTag, Text, CloseTag, End]


def _split_clark(name: str) -> tuple[str | None, str]:
    if name.startswith("{"):
        uri, _, local = name[1:].partition("}")
        return uri, local
    return None, name


class _EventCollector:
    """lxml parser target that queues structural events.

    Keeps a stack of in-scope namespace URI -> prefix maps so that Clark
    names (``{uri}local``) are reported back in prefixed form.
    """

    def __init__(self) -> None:
        self.events: deque[Event] = deque()
        self._scopes: list[dict[str, str | None]] = [{XML_NAMESPACE: "xml"}]
        self._pending: tuple[str, dict[str, str]] | None = None

    # ── lxml target interface ───────────────────────────────────

    def start(self, tag, attrib, nsmap=None) -> None:
        self._flush_pending()

        scope = dict(self._scopes[-1])
        attributes: dict[str, str] = {}
        for prefix, uri in (nsmap or {}).items():
            # Declarations go first so they precede any use on this element
            attributes["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri
            scope[uri] = prefix
        self._scopes.append(scope)

        for key, value in attrib.items():
            attributes[self._qualify(key, attribute=True)] = value
        self._pending = (self._qualify(tag), attributes)

    def data(self, content) -> None:
        if not content:
            return
        self._flush_pending()
        self.events.append(Text(content))

    def end(self, tag) -> None:
        name = self._qualify(tag)
        if self._pending is not None:
            pending_name, attributes = self._pending
            self._pending = None
            self.events.append(OpenTag(pending_name, attributes, self_closing=True))
            self.events.append(CloseTag(name, self_closing=True))
        else:
            self.events.append(CloseTag(name))
        self._scopes.pop()

    def close(self) -> None:
        self._flush_pending()
        self.events.append(End())

    # ── Helpers ─────────────────────────────────────────────────

    def _flush_pending(self) -> None:
        if self._pending is not None:
            name, attributes = self._pending
            self._pending = None
            self.events.append(OpenTag(name, attributes))

    def _qualify(self, name: str, *, attribute: bool = False) -> str:
        uri, local = _split_clark(name)
        if uri is None:
            return local
        prefix = self._scopes[-1].get(uri)
        if prefix is None and attribute:
            # Unprefixed attributes never take the default namespace
            prefix = next(
                (p for u, p in self._scopes[-1].items() if u == uri and p), None
            )
        return f"{prefix}:{local}" if prefix else local

    def drain(self) -> Iterator[Event]:
        while self.events:
            yield self.events.popleft()


def iter_events(source: Source, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Event]:
    """Yield structural events from *source* (a path or binary file object).

    Raises:
        OSError: If the file cannot be opened or read.
        etree.XMLSyntaxError: On malformed XML.
    """
    collector = _EventCollector()
    parser = etree.XMLParser(target=collector, huge_tree=True, resolve_entities=False)

    if hasattr(source, "read"):
        yield from _feed(parser, collector, source, chunk_size)
    else:
        with open(source, "rb") as f:
            yield from _feed(parser, collector, f, chunk_size)


def _feed(parser, collector: _EventCollector, stream: BinaryIO, chunk_size: int) -> Iterator[Event]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        parser.feed(chunk)
        yield from collector.drain()
    parser.close()
    yield from collector.drain()
