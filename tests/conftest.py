"""Shared fixtures for hlextract tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

DocumentFactory = Callable[..., Path]


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """An existing, empty output directory."""
    d = tmp_path / "out"
    d.mkdir()
    return d


@pytest.fixture
def write_doc(tmp_path: Path) -> DocumentFactory:
    """Factory writing a document from a list of lines.

    Usage: ``write_doc("README.md", ["text", "```scala", "val a = 1", "```"])``
    """

    def _write(name: str, lines: list[str], *, directory: Path | None = None) -> Path:
        base = directory or tmp_path / "docs"
        path = base / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_doc_lines() -> list[str]:
    """A document with one packaged sample followed by one bare sample."""
    return [
        "Some introduction.",
        "```scala",
        "package foo",
        "object Foo",
        "```",
        "More text.",
        "```scala",
        "val x = 1",
        "```",
    ]


@pytest.fixture(autouse=True)
def _reset_hlextract_logger() -> Iterator[None]:
    """Undo logging changes made by the CLI."""
    log = logging.getLogger("hlextract")
    handlers, level, propagate = list(log.handlers), log.level, log.propagate
    yield
    log.handlers[:] = handlers
    log.setLevel(level)
    log.propagate = propagate
