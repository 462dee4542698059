"""Single-pass streaming transform engine.

Every operation is the same walk over the tokenizer's events with a
different :class:`TransformPolicy`.  The engine owns the per-file
:class:`DocumentContext`; policies read it and decide what to record or
emit.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from lxml import etree

from tmxstream.context import DocumentContext
from tmxstream.errors import FileProcessingError
from tmxstream.tokenizer import (
    DEFAULT_CHUNK_SIZE,
    CloseTag,
    Event,
    OpenTag,
    Source,
    Text,
    iter_events,
)

logger = logging.getLogger(__name__)


class TransformPolicy:
    """Hooks called once per event.  The default hooks do nothing.

    For open tags the context is updated before the hook runs; for close
    tags the hook runs first, so ``</tu>`` is still seen as inside a
    ``tu``.
    """

    def open_tag(self, tag: OpenTag, context: DocumentContext) -> None:
        pass

    def text(self, text: Text, context: DocumentContext) -> None:
        pass

    def close_tag(self, tag: CloseTag, context: DocumentContext) -> None:
        pass

    def end(self, context: DocumentContext) -> None:
        pass


def check_source(path: str | Path) -> Path:
    """Fail with a ``read`` error before any output is created."""
    path = Path(path)
    if not path.is_file():
        raise FileProcessingError(path, "read", "no such file")
    return path


def check_destination(source: Path, destination: str | Path) -> Path:
    """Fail with a ``write`` error if *destination* is *source* itself.

    Opening the sink truncates its file, so this must run first.
    """
    destination = Path(destination)
    if destination.resolve() == source.resolve():
        raise FileProcessingError(destination, "write", "output would overwrite input")
    return destination


def _label(source: Source) -> str | Path:
    if isinstance(source, (str, Path)):
        return source
    return getattr(source, "name", "<stream>")


def _events(source: Source, chunk_size: int) -> Iterator[Event]:
    label = _label(source)
    try:
        yield from iter_events(source, chunk_size)
    except etree.XMLSyntaxError as exc:
        raise FileProcessingError(label, "parse", str(exc)) from exc
    except OSError as exc:
        raise FileProcessingError(label, "read", exc.strerror or str(exc)) from exc


def transform(
    source: Source,
    policy: TransformPolicy,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DocumentContext:
    """Stream *source* through *policy* and return the final context."""
    context = DocumentContext()
    for event in _events(source, chunk_size):
        if isinstance(event, OpenTag):
            context.observe(event)
            policy.open_tag(event, context)
        elif isinstance(event, Text):
            policy.text(event, context)
        elif isinstance(event, CloseTag):
            policy.close_tag(event, context)
            context.observe(event)
        else:
            policy.end(context)
    logger.debug("Finished streaming %s", _label(source))
    return context
