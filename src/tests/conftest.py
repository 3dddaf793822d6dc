"""Shared fixtures for Inkwell tests."""

from pathlib import Path

import pytest

SAMPLE_POSTS = {
    "a.md": (
        '---\ntitle: "Alpha Post"\nsummary: "First"\npublishedAt: "2025-01-01"\n---\n'
        "\nHello from alpha.\n"
    ),
    "b.md": (
        '---\ntitle: "Beta Post"\nsummary: "Second"\npublishedAt: "2025-03-01"\n---\n'
        "\n# Beta\n\nHello from **beta**.\n"
    ),
    "c.md": '---\ntitle: "Gamma Post"\nsummary: "Undated"\n---\n\nNo date here.\n',
}


def _write_post(directory: Path, filename: str, text: str) -> Path:
    path = directory / filename
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def make_post():
    """Write a post file: make_post(directory, filename, text)."""
    return _write_post


@pytest.fixture
def blog_dir(tmp_path):
    """Content store with a, b (newest) and c (no publishedAt)."""
    for filename, text in SAMPLE_POSTS.items():
        _write_post(tmp_path, filename, text)
    return tmp_path
