"""Document model: parsed block tree and the Markdown adapter."""

from relnote_engine.document.model import Document, Heading, LinkTarget, Position
from relnote_engine.document.parser import ParserOptions, new_parser, parse

__all__ = [
    "Document", "Heading", "LinkTarget", "Position",
    "ParserOptions", "new_parser", "parse",
]
