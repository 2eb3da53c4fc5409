"""Discover fragment files under a directory tree."""

from __future__ import annotations

from pathlib import Path

DEFAULT_SUFFIX = ".md"


def sorted_fragment_filenames(root: Path | str, suffix: str = DEFAULT_SUFFIX) -> list[str]:
    """Find every fragment file under root.

    Returns POSIX-style paths relative to root, sorted by codepoint.
    '.' sorts before '/', which sorts before alphanumerics, so a file
    like "net.md" comes before anything in the directory "net".

    Raises:
        FileNotFoundError: If root is not a directory.
    """
    base = Path(root)
    if not base.is_dir():
        raise FileNotFoundError(f"fragment directory not found: {base}")

    filenames = [
        p.relative_to(base).as_posix()
        for p in base.rglob("*")
        if p.is_file() and p.name.endswith(suffix)
    ]
    return sorted(filenames)


def read_fragment(root: Path | str, filename: str) -> str:
    """Read a fragment file given its path relative to root."""
    return (Path(root) / filename).read_text(encoding="utf-8")
