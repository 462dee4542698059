"""Tests for XML re-serialization."""

from __future__ import annotations

from tmxstream.serializer import (
    escape_attribute,
    escape_text,
    render_close_tag,
    render_open_tag,
)
from tmxstream.tokenizer import CloseTag, OpenTag


class TestEscaping:
    def test_attribute_escapes_reserved_characters(self):
        assert escape_attribute("""a&b<c>d"e'f""") == "a&amp;b&lt;c&gt;d&quot;e&apos;f"

    def test_attribute_escapes_whitespace_characters(self):
        assert escape_attribute("a\nb\tc\rd") == "a&#10;b&#9;c&#13;d"

    def test_text_escapes_markup_characters(self):
        assert escape_text("Terms & <Conditions>") == "Terms &amp; &lt;Conditions&gt;"

    def test_text_keeps_quotes(self):
        assert escape_text("""It's "quoted\"""") == """It's "quoted\""""

    def test_plain_text_unchanged(self):
        assert escape_text("สวัสดีชาวโลก 27°C") == "สวัสดีชาวโลก 27°C"


class TestRendering:
    def test_open_tag_with_attributes(self):
        tag = OpenTag("tuv", {"xml:lang": "en-US", "datatype": ""})
        assert render_open_tag(tag) == '<tuv xml:lang="en-US" datatype="">'

    def test_open_tag_without_attributes(self):
        assert render_open_tag(OpenTag("seg")) == "<seg>"

    def test_self_closing_open_tag(self):
        tag = OpenTag("header", {"srclang": "en"}, self_closing=True)
        assert render_open_tag(tag) == '<header srclang="en"/>'

    def test_attribute_override(self):
        tag = OpenTag("tuv", {"xml:lang": "en-US"})
        assert render_open_tag(tag, {"xml:lang": "en-GB"}) == '<tuv xml:lang="en-GB">'

    def test_attribute_values_escaped(self):
        tag = OpenTag("prop", {"type": 'a<"b">'})
        assert render_open_tag(tag) == '<prop type="a&lt;&quot;b&quot;&gt;">'

    def test_close_tag(self):
        assert render_close_tag(CloseTag("tu")) == "</tu>"

    def test_self_closing_close_tag_renders_nothing(self):
        assert render_close_tag(CloseTag("tu", self_closing=True)) == ""
