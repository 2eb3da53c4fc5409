"""Remove headings whose sections have no content."""

from __future__ import annotations

from relnote_engine.document.model import Heading
from relnote_engine.fragments.text import add_lines


def remove_empty_sections(blocks: list) -> list:
    """Remove headings with no content.

    A heading has no content if there are no blocks between it and the
    next heading at the same or a higher level, or the end of the
    document. Positions of the surviving blocks are moved up in place
    to close the gaps left by removed headings.
    """
    res: list = []
    delta = 0  # lines removed so far

    def rem(level: int) -> None:
        # Trailing headings at this level or deeper are empty.
        nonlocal delta
        while res:
            last = res[-1]
            if not isinstance(last, Heading) or last.level < level:
                break
            res.pop()
            # The heading's own lines plus the blank line after it.
            delta += last.position.end_line - last.position.start_line + 2

    for b in blocks:
        if isinstance(b, Heading):
            rem(b.level)
        add_lines(b, -delta)
        res.append(b)
    rem(1)
    return res
