"""Check that release-note fragments are well-formed before merging.

A fragment must:
- contain at least one block
- start with a heading whose text is non-empty and does not begin with '+'
- have, under every heading, a TODO or at least one sentence
  (text with '.', '?' or '!')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relnote_engine.document.parser import ParserOptions, new_parser
from relnote_engine.errors import (
    EmptyContentError,
    EmptyHeadingTextError,
    FragmentError,
    IncompleteSectionError,
    MissingLeadingHeadingError,
    NonMatchingLeadingHeadingError,
)
from relnote_engine.fragments.text import block_text, heading_text_must_match, is_heading

_SENTENCE_END = ".?!"


def has_content(text: str) -> bool:
    """Report whether text holds a TODO or end-of-sentence punctuation.

    Punctuation is a crude approximation to a full sentence.
    """
    return "TODO" in text or any(c in text for c in _SENTENCE_END)


def check_fragment(data: str, options: ParserOptions | None = None) -> None:
    """Raise a FragmentError describing the first problem in a fragment."""
    doc = new_parser(options).parse(data)
    if not doc.blocks:
        raise EmptyContentError()
    if not is_heading(doc.blocks[0]):
        raise MissingLeadingHeadingError()
    htext = block_text(doc.blocks[0])
    if not htext.strip():
        raise EmptyHeadingTextError()
    if not heading_text_must_match(htext):
        raise NonMatchingLeadingHeadingError(htext)

    cur = doc.blocks[0]  # heading beginning the current section
    found = False  # has this section's content been found yet?
    for b in doc.blocks[1:]:
        if is_heading(b):
            if not found:
                break
            cur = b
            found = False
        elif not found:
            found = has_content(block_text(b))
    if not found:
        raise IncompleteSectionError(block_text(cur))


@dataclass
class CheckResult:
    """Result of checking a batch of fragment files."""

    errors: list[str] = field(default_factory=list)
    checked: int = 0
    failed: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = [f"Fragment Check: {self.checked} fragments checked"]
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  {e}")
        else:
            lines.append("All checks passed.")
        return "\n".join(lines)


def check_files(
    paths: list[Path | str],
    options: ParserOptions | None = None,
) -> CheckResult:
    """Check every fragment file in paths, collecting failures.

    Unreadable files are reported as failures rather than aborting the run.
    """
    result = CheckResult()
    for p in paths:
        path = Path(p)
        result.checked += 1
        try:
            check_fragment(path.read_text(encoding="utf-8"), options)
        except (OSError, UnicodeDecodeError, FragmentError) as e:
            result.failed.append(str(path))
            result.errors.append(f"{path}: {e}")
    return result
