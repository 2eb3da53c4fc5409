"""Block tree for parsed Markdown fragments.

A Document is a flat sequence of top-level blocks plus the link
reference definitions collected from the source. Each block carries
its own Position; nested blocks (list items, quote contents, heading
titles) carry independent Position records.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields


@dataclass
class Position:
    """1-based, inclusive source line range."""

    start_line: int
    end_line: int

    def shifted(self, n: int) -> Position:
        return Position(self.start_line + n, self.end_line + n)


def _plain(value):
    """Convert a node attribute to JSON-compatible data."""
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, Position):
        return [value.start_line, value.end_line]
    return value


class Node:
    """Shared serialization for blocks and inlines."""

    def to_dict(self) -> dict:
        data = {"kind": type(self).__name__}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data


# ── Inlines ──────────────────────────────────────────────────────


@dataclass
class Plain(Node):
    text: str

    def plain_text(self) -> str:
        return self.text


@dataclass
class Code(Node):
    text: str

    def plain_text(self) -> str:
        return self.text


@dataclass
class HTMLTag(Node):
    text: str

    def plain_text(self) -> str:
        return self.text


@dataclass
class SoftBreak(Node):
    def plain_text(self) -> str:
        return "\n"


@dataclass
class HardBreak(Node):
    def plain_text(self) -> str:
        return "\n"


@dataclass
class Emph(Node):
    inner: list = field(default_factory=list)

    def plain_text(self) -> str:
        return "".join(i.plain_text() for i in self.inner)


@dataclass
class Strong(Node):
    inner: list = field(default_factory=list)

    def plain_text(self) -> str:
        return "".join(i.plain_text() for i in self.inner)


@dataclass
class Link(Node):
    inner: list = field(default_factory=list)
    url: str = ""
    title: str = ""

    def plain_text(self) -> str:
        return "".join(i.plain_text() for i in self.inner)


@dataclass
class Image(Node):
    inner: list = field(default_factory=list)
    url: str = ""
    title: str = ""

    def plain_text(self) -> str:
        return "".join(i.plain_text() for i in self.inner)


# ── Blocks ───────────────────────────────────────────────────────


@dataclass
class Block(Node):
    position: Position


@dataclass
class Text(Block):
    """A run of inline content: a heading title or a tight-list paragraph."""

    inline: list = field(default_factory=list)


@dataclass
class Heading(Block):
    level: int = 1
    text: Text | None = None
    id: str = ""


@dataclass
class Paragraph(Block):
    text: Text | None = None


@dataclass
class Item(Block):
    blocks: list = field(default_factory=list)


@dataclass
class List(Block):
    items: list = field(default_factory=list)
    ordered: bool = False
    start: int = 1


@dataclass
class Quote(Block):
    blocks: list = field(default_factory=list)


@dataclass
class CodeBlock(Block):
    lines: list = field(default_factory=list)
    info: str = ""
    fenced: bool = True


@dataclass
class HTMLBlock(Block):
    lines: list = field(default_factory=list)


@dataclass
class ThematicBreak(Block):
    pass


@dataclass
class Empty(Block):
    """A blank-line marker."""


@dataclass
class LinkTarget:
    url: str
    title: str = ""


@dataclass
class Document:
    blocks: list = field(default_factory=list)
    links: dict = field(default_factory=dict)

    def take_blocks(self) -> list:
        """Move the blocks out of this document, leaving it empty."""
        blocks, self.blocks = self.blocks, []
        return blocks

    def take_links(self) -> dict:
        """Move the link references out of this document, leaving it empty."""
        links, self.links = self.links, {}
        return links

    def to_dict(self) -> dict:
        return {
            "blocks": [b.to_dict() for b in self.blocks],
            "links": {
                key: {"url": link.url, "title": link.title}
                for key, link in self.links.items()
            },
        }
