"""Structural context tracking over the fixed TMX element hierarchy."""

from __future__ import annotations

from dataclasses import dataclass

from tmxstream import tmx
from tmxstream.tokenizer import CloseTag, Event, OpenTag


@dataclass
class DocumentContext:
    """Where the parser currently is inside ``tmx/header|body/tu/tuv``.

    A flag is set only by the matching open tag while its parent flag is
    set, and cleared only by the matching close tag.  Elements outside
    their expected parent are ignored rather than reported; TMX structure
    is assumed, not validated.
    """

    inside_tmx: bool = False
    inside_header: bool = False
    inside_body: bool = False
    inside_tu: bool = False
    inside_tuv: bool = False
    tuv_language: str = ""

    def observe(self, event: Event) -> DocumentContext:
        if isinstance(event, OpenTag):
            self._open(event)
        elif isinstance(event, CloseTag):
            self._close(event.local)
        return self

    def _open(self, tag: OpenTag) -> None:
        name = tag.local
        if name == tmx.TMX:
            self.inside_tmx = True
        elif name == tmx.HEADER and self.inside_tmx:
            self.inside_header = True
        elif name == tmx.BODY and self.inside_tmx:
            self.inside_body = True
        elif name == tmx.TU and self.inside_body:
            self.inside_tu = True
        elif name == tmx.TUV and self.inside_tu:
            self.inside_tuv = True
            self.tuv_language = tag.attributes.get(tmx.XML_LANG, "")

    def _close(self, name: str) -> None:
        if name == tmx.TMX:
            self.inside_tmx = False
        elif name == tmx.HEADER:
            self.inside_header = False
        elif name == tmx.BODY:
            self.inside_body = False
        elif name == tmx.TU:
            self.inside_tu = False
        elif name == tmx.TUV:
            self.inside_tuv = False
            self.tuv_language = ""
