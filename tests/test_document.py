"""Tests for the Markdown document adapter."""

import json

import pytest
from markdown_it.token import Token

from relnote_engine.document.model import (
    Code,
    CodeBlock,
    Document,
    Emph,
    Heading,
    HTMLBlock,
    Image,
    Item,
    Link,
    LinkTarget,
    List,
    Paragraph,
    Plain,
    Position,
    Quote,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)
from relnote_engine.document.parser import ParserOptions, _position, new_parser, parse
from relnote_engine.errors import UnknownBlockError


class TestBlocks:
    def test_heading_and_paragraph(self):
        doc = parse("# Title\n\nBody.\n")
        h, p = doc.blocks
        assert isinstance(h, Heading)
        assert h.level == 1
        assert h.position == Position(1, 1)
        assert h.text.inline == [Plain("Title")]
        assert isinstance(p, Paragraph)
        assert p.position == Position(3, 3)

    def test_setext_heading_spans_two_lines(self):
        doc = parse("Title\n=====\n")
        assert doc.blocks[0].level == 1
        assert doc.blocks[0].position == Position(1, 2)

    def test_heading_levels(self):
        doc = parse("## Two\n\n#### Four\n")
        assert [b.level for b in doc.blocks] == [2, 4]

    def test_positions_not_shared(self):
        h = parse("# Title\n").blocks[0]
        assert h.position == h.text.position
        assert h.position is not h.text.position

    def test_tight_list_items_hold_text(self):
        doc = parse("- a\n- b\n")
        lst = doc.blocks[0]
        assert isinstance(lst, List)
        assert not lst.ordered
        assert lst.position == Position(1, 2)
        assert all(isinstance(i, Item) for i in lst.items)
        assert [type(b) for b in lst.items[0].blocks] == [Text]

    def test_loose_list_items_hold_paragraphs(self):
        doc = parse("- a\n\n- b\n")
        assert [type(b) for b in doc.blocks[0].items[0].blocks] == [Paragraph]

    def test_ordered_list_start(self):
        lst = parse("3. x\n4. y\n").blocks[0]
        assert lst.ordered
        assert lst.start == 3

    def test_nested_list(self):
        lst = parse("- a\n  - b\n").blocks[0]
        inner = lst.items[0].blocks[1]
        assert isinstance(inner, List)
        assert len(inner.items) == 1

    def test_fenced_code(self):
        cb = parse("```python\nx = 1\ny = 2\n```\n").blocks[0]
        assert isinstance(cb, CodeBlock)
        assert cb.fenced
        assert cb.info == "python"
        assert cb.lines == ["x = 1", "y = 2"]
        assert cb.position == Position(1, 4)

    def test_indented_code(self):
        cb = parse("    code\n").blocks[0]
        assert not cb.fenced
        assert cb.lines == ["code"]

    def test_html_block(self):
        hb = parse("<div>\nhi\n</div>\n").blocks[0]
        assert isinstance(hb, HTMLBlock)
        assert hb.lines == ["<div>", "hi", "</div>"]

    def test_quote(self):
        q = parse("> quoted\n").blocks[0]
        assert isinstance(q, Quote)
        assert isinstance(q.blocks[0], Paragraph)

    def test_thematic_break(self):
        assert isinstance(parse("---\n").blocks[0], ThematicBreak)

    def test_blank_input(self):
        assert parse("\n\n").blocks == []


class TestInlines:
    def test_formatting(self):
        p = parse("Some *em* and **strong** `code`.\n").blocks[0]
        kinds = [type(i) for i in p.text.inline]
        assert kinds == [Plain, Emph, Plain, Strong, Plain, Code, Plain]
        assert p.text.inline[1].inner == [Plain("em")]

    def test_soft_break(self):
        p = parse("a\nb\n").blocks[0]
        assert p.text.inline == [Plain("a"), SoftBreak(), Plain("b")]
        assert p.position == Position(1, 2)

    def test_inline_link(self):
        p = parse("See [Go](https://go.dev).\n").blocks[0]
        link = p.text.inline[1]
        assert isinstance(link, Link)
        assert link.url == "https://go.dev"
        assert link.inner == [Plain("Go")]

    def test_image(self):
        img = parse("![alt](img.png)\n").blocks[0].text.inline[0]
        assert isinstance(img, Image)
        assert img.url == "img.png"
        assert img.plain_text() == "alt"


class TestLinkReferences:
    def test_reference_definitions_collected(self):
        doc = parse('See [Go].\n\n[Go]: https://go.dev "The Go site"\n')
        assert doc.links == {"go": LinkTarget("https://go.dev", "The Go site")}
        assert len(doc.blocks) == 1
        link = doc.blocks[0].text.inline[1]
        assert link.url == "https://go.dev"

    def test_no_references(self):
        assert parse("# Title\n").links == {}


class TestHeadingIDs:
    def test_id_stripped(self):
        h = parse("## Tools {#tools}\n").blocks[0]
        assert h.id == "tools"
        assert h.text.inline == [Plain("Tools")]

    def test_ids_disabled(self):
        h = new_parser(ParserOptions(heading_ids=False)).parse("## Tools {#tools}\n").blocks[0]
        assert h.id == ""
        assert h.text.inline == [Plain("Tools {#tools}")]

    def test_enabled_by_default(self):
        assert new_parser().options.heading_ids


class TestDocument:
    def test_take_blocks_moves_ownership(self):
        doc = parse("# A\n\nBody.\n")
        blocks = doc.take_blocks()
        assert len(blocks) == 2
        assert doc.blocks == []

    def test_take_links(self):
        doc = parse("[x]: https://example.com\n")
        links = doc.take_links()
        assert "x" in links
        assert doc.links == {}

    def test_to_dict_is_json(self):
        doc = parse("# A {#a}\n\n- one\n\n[x]: https://example.com\n")
        data = doc.to_dict()
        assert data["blocks"][0]["kind"] == "Heading"
        assert data["blocks"][0]["position"] == [1, 1]
        assert data["blocks"][0]["id"] == "a"
        assert data["blocks"][1]["kind"] == "List"
        assert data["links"] == {"x": {"url": "https://example.com", "title": ""}}
        json.dumps(data)

    def test_empty_document(self):
        assert Document().to_dict() == {"blocks": [], "links": {}}


class TestPositions:
    def test_map_converted_to_inclusive_lines(self):
        tok = Token("paragraph_open", "p", 1, map=[2, 5])
        assert _position(tok) == Position(3, 5)

    def test_token_without_map_rejected(self):
        tok = Token("paragraph_open", "p", 1)
        with pytest.raises(UnknownBlockError, match="paragraph_open"):
            _position(tok)
