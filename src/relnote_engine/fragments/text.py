"""Plain-text extraction and position helpers over the block tree."""

from __future__ import annotations

from relnote_engine.document.model import (
    Block,
    CodeBlock,
    Empty,
    Heading,
    HTMLBlock,
    Item,
    List,
    Paragraph,
    Position,
    Quote,
    Text,
    ThematicBreak,
)
from relnote_engine.errors import UnknownBlockError


def is_heading(b: Block) -> bool:
    return isinstance(b, Heading)


def heading_text_must_match(s: str) -> bool:
    """Report whether s is the text of a heading that must match another heading.

    Headings beginning with '+' don't require a match; all others do.
    """
    return len(s) == 0 or s[0] != "+"


def block_text(b: Block) -> str:
    """Return all the text in a block, without any formatting."""
    if isinstance(b, Heading):
        return block_text(b.text) if b.text is not None else ""
    if isinstance(b, Text):
        return inline_text(b.inline)
    if isinstance(b, (CodeBlock, HTMLBlock)):
        return "\n".join(b.lines)
    if isinstance(b, List):
        return blocks_text(b.items)
    if isinstance(b, (Item, Quote)):
        return blocks_text(b.blocks)
    if isinstance(b, Paragraph):
        return block_text(b.text) if b.text is not None else ""
    if isinstance(b, (Empty, ThematicBreak)):
        return ""
    raise UnknownBlockError(b)


def blocks_text(bs: list) -> str:
    """Concatenate the text of each block, each followed by a newline."""
    return "".join(block_text(b) + "\n" for b in bs)


def inline_text(inlines: list) -> str:
    return "".join(i.plain_text() for i in inlines)


_POSITIONED = (
    Heading, Text, CodeBlock, HTMLBlock, List, Item, Empty, Paragraph, Quote, ThematicBreak,
)


def position(b: Block) -> Position:
    if not isinstance(b, _POSITIONED):
        raise UnknownBlockError(b)
    return b.position


def add_lines(b: Block, n: int) -> None:
    """Shift the position of b by n lines (n may be negative).

    Only b's own position moves; nested blocks keep theirs.
    """
    pos = position(b)
    pos.start_line += n
    pos.end_line += n
