"""Re-serialization of tokenizer events back into XML text."""

from __future__ import annotations

from typing import Mapping

from tmxstream.tokenizer import CloseTag, OpenTag

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_ATTRIBUTE_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    # Literal whitespace in attributes is normalized away on re-parse
    "\t": "&#9;",
    "\n": "&#10;",
    "\r": "&#13;",
})

_TEXT_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\r": "&#13;",
})


def escape_attribute(value: str) -> str:
    """Escape *value* for use inside a double-quoted attribute."""
    return value.translate(_ATTRIBUTE_ESCAPES)


def escape_text(content: str) -> str:
    """Escape character data for use as element content."""
    return content.translate(_TEXT_ESCAPES)


def render_open_tag(tag: OpenTag, attributes: Mapping[str, str] | None = None) -> str:
    """Render ``<name a="v">`` (or ``<name a="v"/>`` when self-closing).

    *attributes* overrides the tag's own attributes, e.g. after rewriting.
    """
    if attributes is None:
        attributes = tag.attributes
    parts = [f"<{tag.name}"]
    for key, value in attributes.items():
        parts.append(f' {key}="{escape_attribute(value)}"')
    parts.append("/>" if tag.self_closing else ">")
    return "".join(parts)


def render_close_tag(tag: CloseTag) -> str:
    """Render ``</name>``; self-closing elements were already closed."""
    if tag.self_closing:
        return ""
    return f"</{tag.name}>"
