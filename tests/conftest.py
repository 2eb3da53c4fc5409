"""Shared test fixtures for relnote-engine."""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from any real relnote.yaml or RELNOTE_CONFIG."""
    monkeypatch.delenv("RELNOTE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_tree(tmp_path):
    """Return a helper that writes {relative path: text} under a fresh root."""
    root = tmp_path / "fragments"
    root.mkdir()

    def _write(files: dict[str, str]) -> Path:
        for name, text in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        return root

    return _write


@pytest.fixture
def fragments_dir():
    return FIXTURES / "fragments"
