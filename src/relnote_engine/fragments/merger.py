"""Merge release-note fragments into a single document.

The blocks of the fragments are concatenated in lexicographic order by
filename, with positions renumbered so the merged document reads as if
the files were joined with a blank line between each. Headings left
with no content are removed afterwards.

Files in the "minor changes" directory of the standard library section
are named after the package they describe; a package heading is
inserted before the first file of each package.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Iterator
from pathlib import Path

from relnote_engine.config import RelnoteConfig
from relnote_engine.document.model import Document, Empty, Heading, Link, Plain, Position, Text
from relnote_engine.document.parser import new_parser
from relnote_engine.errors import DuplicateLinkReferenceError
from relnote_engine.fragments.discover import read_fragment, sorted_fragment_filenames
from relnote_engine.fragments.pruner import remove_empty_sections
from relnote_engine.fragments.text import add_lines, position


def stdlib_package(filename: str) -> str:
    """Return the standard library package for filename, or "".

    A filename represents package P if it is in a directory matching
    the glob "*stdlib/*minor/P".
    """
    first, _, rest = filename.partition("/")
    if not first.endswith("stdlib"):
        return ""
    second, _, rest = rest.partition("/")
    if not second.endswith("minor"):
        return ""
    pkg = posixpath.normpath(posixpath.dirname(rest) or ".")
    if pkg == ".":
        return ""
    return pkg


def stdlib_package_heading(
    pkg: str,
    last_line: int,
    url_prefix: str = "/pkg/",
    level: int = 4,
) -> Heading:
    """Build the heading linking to pkg, two lines after last_line."""
    line = last_line + 2
    return Heading(
        Position(line, line),
        level=level,
        text=Text(
            Position(line, line),
            inline=[Link(inner=[Plain(pkg)], url=f"{url_prefix}{pkg}/")],
        ),
    )


def merge_documents(
    named_documents: Iterable[tuple[str, Document]],
    config: RelnoteConfig | None = None,
) -> Document:
    """Merge already-parsed fragments, given in merge order.

    Each fragment is consumed: its blocks and links move into the result.

    Raises:
        DuplicateLinkReferenceError: If two fragments define the same link
            reference key.
    """
    cfg = config or RelnoteConfig()
    doc = Document()
    prev_pkg = ""  # previous stdlib package, if any
    for filename, newdoc in named_documents:
        if not newdoc.blocks:
            continue
        if doc.blocks:
            # First file of a new stdlib package under "Minor changes to
            # the library": insert a heading for the package.
            pkg = stdlib_package(filename)
            if pkg and pkg != prev_pkg:
                doc.blocks.append(stdlib_package_heading(
                    pkg,
                    position(doc.blocks[-1]).end_line,
                    url_prefix=cfg.package_url_prefix,
                    level=cfg.package_heading_level,
                ))
            prev_pkg = pkg
            # The end of a file acts as a blank line.
            last_line = position(doc.blocks[-1]).end_line
            delta = last_line + 2 - position(newdoc.blocks[0]).start_line
            for b in newdoc.blocks:
                add_lines(b, delta)

        doc.blocks.extend(b for b in newdoc.take_blocks() if not isinstance(b, Empty))

        for key, link in newdoc.take_links().items():
            if key in doc.links:
                raise DuplicateLinkReferenceError(key, filename)
            doc.links[key] = link

    doc.blocks = remove_empty_sections(doc.blocks)
    if doc.blocks and doc.links:
        # Blank line separating the blocks from the link definitions.
        doc.blocks.append(Empty(position(doc.blocks[-1]).shifted(2)))
    return doc


def _parsed_fragments(
    root: Path | str,
    filenames: list[str],
    config: RelnoteConfig,
) -> Iterator[tuple[str, Document]]:
    parser = new_parser(config.parser_options())
    for filename in filenames:
        yield filename, parser.parse(read_fragment(root, filename))


def merge(root: Path | str, config: RelnoteConfig | None = None) -> Document:
    """Merge the fragment files in the tree rooted at root into one document.

    Files are read lazily, one at a time, in merge order.
    """
    cfg = config or RelnoteConfig()
    filenames = sorted_fragment_filenames(root, cfg.suffix)
    return merge_documents(_parsed_fragments(root, filenames, cfg), cfg)
