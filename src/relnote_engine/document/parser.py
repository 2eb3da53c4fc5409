"""Parse Markdown text into the block tree.

Tokenizing is done by markdown-it-py (CommonMark preset); this module
folds its flat open/close token stream back into nested blocks and
records each block's source line range.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from markdown_it import MarkdownIt
from markdown_it.token import Token

from relnote_engine.document.model import (
    Code,
    CodeBlock,
    Document,
    Emph,
    HardBreak,
    Heading,
    HTMLBlock,
    HTMLTag,
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
from relnote_engine.errors import UnknownBlockError

# Trailing "{#some-id}" on a heading line
_HEADING_ID_RE = re.compile(r"\s*\{#([^\s{}]+)\}\s*$")

_INLINE_CONTAINERS = {
    "em_open": ("em_close", Emph),
    "strong_open": ("strong_close", Strong),
    "link_open": ("link_close", Link),
}


@dataclass
class ParserOptions:
    """Parser settings.

    heading_ids: strip a trailing ``{#id}`` from heading text and record
        it as the heading's id. Downstream renderers rely on this.
    """

    heading_ids: bool = True


class FragmentParser:
    """A configured Markdown parser producing Documents."""

    def __init__(self, options: ParserOptions | None = None) -> None:
        self.options = options or ParserOptions()
        self._md = MarkdownIt("commonmark")

    def parse(self, text: str) -> Document:
        env: dict = {}
        tokens = self._md.parse(text, env)
        blocks, _ = self._blocks(tokens, 0, None)
        links = {}
        for label, ref in env.get("references", {}).items():
            links[label.lower()] = LinkTarget(
                url=ref.get("href") or "",
                title=ref.get("title") or "",
            )
        return Document(blocks=blocks, links=links)

    def _blocks(self, tokens: list[Token], i: int, close: str | None) -> tuple[list, int]:
        """Build blocks from tokens[i:] up to the matching close token.

        Returns the blocks and the index just past the close token.
        """
        blocks = []
        while i < len(tokens):
            tok = tokens[i]
            if close is not None and tok.type == close:
                return blocks, i + 1
            kind = tok.type
            if kind == "heading_open":
                blocks.append(self._heading(tok, tokens[i + 1]))
                i += 3
            elif kind == "paragraph_open":
                text = Text(_position(tok), _inlines(tokens[i + 1].children or []))
                # Paragraphs in tight lists carry no paragraph wrapper.
                blocks.append(text if tok.hidden else Paragraph(_position(tok), text))
                i += 3
            elif kind in ("bullet_list_open", "ordered_list_open"):
                items, i = self._blocks(tokens, i + 1, kind.replace("_open", "_close"))
                blocks.append(List(
                    _position(tok),
                    items=items,
                    ordered=kind == "ordered_list_open",
                    start=int(tok.attrGet("start") or 1),
                ))
            elif kind == "list_item_open":
                children, i = self._blocks(tokens, i + 1, "list_item_close")
                blocks.append(Item(_position(tok), blocks=children))
            elif kind == "blockquote_open":
                children, i = self._blocks(tokens, i + 1, "blockquote_close")
                blocks.append(Quote(_position(tok), blocks=children))
            elif kind in ("fence", "code_block"):
                blocks.append(CodeBlock(
                    _position(tok),
                    lines=_lines(tok.content),
                    info=tok.info.strip(),
                    fenced=kind == "fence",
                ))
                i += 1
            elif kind == "html_block":
                blocks.append(HTMLBlock(_position(tok), lines=_lines(tok.content)))
                i += 1
            elif kind == "hr":
                blocks.append(ThematicBreak(_position(tok)))
                i += 1
            else:
                raise UnknownBlockError(tok)
        return blocks, i

    def _heading(self, tok: Token, inline: Token) -> Heading:
        children = _inlines(inline.children or [])
        heading_id = ""
        if self.options.heading_ids and children and isinstance(children[-1], Plain):
            m = _HEADING_ID_RE.search(children[-1].text)
            if m:
                heading_id = m.group(1)
                children[-1].text = children[-1].text[: m.start()]
                if not children[-1].text:
                    children.pop()
        return Heading(
            _position(tok),
            level=int(tok.tag[1:]),
            text=Text(_position(tok), children),
            id=heading_id,
        )


def _position(tok: Token) -> Position:
    # markdown-it maps are 0-based and end-exclusive.
    if not tok.map:
        raise UnknownBlockError(tok)
    start, end = tok.map
    return Position(start + 1, max(end, start + 1))


def _lines(content: str) -> list[str]:
    if not content:
        return []
    return content.rstrip("\n").split("\n")


def _inlines(tokens: list[Token]) -> list:
    result, _ = _inline_run(tokens, 0, None)
    return result


def _inline_run(tokens: list[Token], i: int, close: str | None) -> tuple[list, int]:
    result = []
    while i < len(tokens):
        tok = tokens[i]
        kind = tok.type
        if close is not None and kind == close:
            return result, i + 1
        if kind in ("text", "text_special"):
            if result and isinstance(result[-1], Plain):
                result[-1].text += tok.content
            else:
                result.append(Plain(tok.content))
        elif kind == "code_inline":
            result.append(Code(tok.content))
        elif kind == "softbreak":
            result.append(SoftBreak())
        elif kind == "hardbreak":
            result.append(HardBreak())
        elif kind == "html_inline":
            result.append(HTMLTag(tok.content))
        elif kind == "image":
            result.append(Image(
                inner=_inlines(tok.children or []),
                url=str(tok.attrGet("src") or ""),
                title=str(tok.attrGet("title") or ""),
            ))
        elif kind in _INLINE_CONTAINERS:
            end, cls = _INLINE_CONTAINERS[kind]
            inner, i = _inline_run(tokens, i + 1, end)
            node = cls(inner=inner)
            if cls is Link:
                node.url = str(tok.attrGet("href") or "")
                node.title = str(tok.attrGet("title") or "")
            result.append(node)
            continue
        else:
            raise UnknownBlockError(tok)
        i += 1
    return result, i


def new_parser(options: ParserOptions | None = None) -> FragmentParser:
    """Return a properly configured fragment parser."""
    return FragmentParser(options or ParserOptions(heading_ids=True))


def parse(text: str, options: ParserOptions | None = None) -> Document:
    return new_parser(options).parse(text)
