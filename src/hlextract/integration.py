"""Hooks for wiring extraction into a build.

A build typically needs four things from hlextract:

* the generated sources to add to the test compilation
  (:func:`generate_sources`);
* the documents to watch for changes (:func:`watch_sources`);
* options keeping the generated package out of the API docs
  (:func:`doc_options`);
* a filter keeping the generated classes out of packaged artifacts
  (:func:`exclude_generated_mappings`).

All of them honour the activation policy of the settings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TypeVar

from .config import ExtractorSettings, activated
from .discovery import list_files
from .extractor import extract_highlights
from .writer import ROOT_PACKAGE

logger = logging.getLogger(__name__)

T = TypeVar("T")


def looks_like_scala_project(directory: str | Path) -> bool:
    """Whether *directory* looks like the root of a Scala build.

    True when it holds a ``build.sbt`` file, a ``project/`` directory, or
    any ``.scala`` file under ``src/``.
    """
    root = Path(directory)
    if (root / "build.sbt").is_file() or (root / "project").is_dir():
        return True
    src = root / "src"
    return src.is_dir() and any(src.rglob("*.scala"))


def markdown_sources(settings: ExtractorSettings) -> list[Path]:
    """Documents selected by *settings*, regardless of activation."""
    return list_files(settings.directory, settings.include, settings.exclude)


def generate_sources(
    settings: ExtractorSettings,
    *,
    applies: bool = True,
    environ: Mapping[str, str] | None = None,
) -> list[Path]:
    """Extract the samples of every document selected by *settings*.

    Args:
        settings: Extraction settings.
        applies: Whether the project is one extraction applies to.  When
            ``False`` nothing is generated and a warning is logged.
        environ: Environment used by the activation policy (default:
            ``os.environ``).

    Returns:
        Generated paths, or an empty list when extraction is skipped.
    """
    if not applies:
        logger.warning("Skip highlight extraction on non-Scala project: %s", settings.project_dir)
        return []

    def run() -> list[Path]:
        return extract_highlights(
            markdown_sources(settings),
            settings.resolved_output_dir,
            start_token=settings.start_token,
            end_token=settings.end_token,
            encoding=settings.encoding,
        )

    if not settings.is_active(environ):
        logger.warning("Skip highlight extraction, disabled by %s", settings.activation)
    return activated(settings.activation, [], run, environ)


def watch_sources(
    settings: ExtractorSettings,
    default: list[T],
    environ: Mapping[str, str] | None = None,
) -> list[Path] | list[T]:
    """Documents to watch when active, *default* otherwise."""
    return activated(settings.activation, default, lambda: markdown_sources(settings), environ)


def doc_options(settings: ExtractorSettings, environ: Mapping[str, str] | None = None) -> list[str]:
    """Scaladoc options hiding the generated package when active."""
    return activated(settings.activation, [], lambda: ["-skip-packages", ROOT_PACKAGE], environ)


def exclude_generated_mappings(mappings: Iterable[tuple[T, str]]) -> list[tuple[T, str]]:
    """Drop the ``(file, target)`` mappings that belong to generated samples."""
    prefix = f"{ROOT_PACKAGE}/"
    return [(file, target) for file, target in mappings if not target.startswith(prefix)]
