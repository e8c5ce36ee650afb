from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest


def make_tree(root: Path, files: Iterable[str], content: str = "<html></html>") -> Path:
    """Create a fake static export with the given relative file paths."""
    root.mkdir(parents=True, exist_ok=True)
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """The three-page export used throughout the tests."""
    return make_tree(
        tmp_path / "out",
        [
            "index.html",
            "flashcards/index.html",
            "databases/sql/index.html",
        ],
    )


@pytest.fixture(autouse=True)
def _no_site_url(monkeypatch):
    # Keep the developer's shell environment out of the tests
    monkeypatch.delenv("SITE_URL", raising=False)
