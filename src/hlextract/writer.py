"""Writers for generated Scala sources.

Two kinds of files are produced:

* one *sample file* per extracted :class:`~hlextract.scanner.Block`;
* one *aggregator file* per document, a package object mixing in every
  wrapped sample of that document so they are type-checked together.

Samples that do not declare their own package are wrapped in a trait
``Sample<index>`` inside ``highlightextractor.samples<id>``, where ``<id>``
is the package id of the document they come from.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .exceptions import GeneratedFileError
from .scanner import Block

ROOT_PACKAGE = "highlightextractor"
SOURCE_SUFFIX = ".scala"

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    """A sample file written to disk.

    Attributes:
        path: Location of the generated source.
        block: The block it was generated from.
    """

    path: Path
    block: Block

    @property
    def sample_name(self) -> str | None:
        """Trait name to register with the aggregator, if the block was wrapped."""
        return self.block.sample_name


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def normalize_name(name: str) -> str:
    """Replace every character unsafe in a file name with ``-``.

    Example: ``"README.md"`` becomes ``"README-md"``.
    """
    return _UNSAFE_CHARS_RE.sub("-", name)


def block_file_name(block: Block) -> str:
    """File name for *block*: document name, marker line, and sequence index."""
    return f"{normalize_name(block.source.name)}-{block.line}-{block.index}{SOURCE_SUFFIX}"


def aggregator_file_name(package_id: int) -> str:
    return f"package{package_id}{SOURCE_SUFFIX}"


def samples_package(package_id: int) -> str:
    """Fully qualified package holding the wrapped samples of one document."""
    return f"{ROOT_PACKAGE}.samples{package_id}"


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def write_block(block: Block, out_dir: str | Path, *, package_id: int) -> GeneratedFile:
    """Write *block* to its own source file under *out_dir*.

    The file starts with a comment pointing back to the document and line
    the sample came from.  Blocks without their own package declaration
    are wrapped in ``trait Sample<index>``; the others are copied as is.

    Args:
        block: The block to write.
        out_dir: Existing output directory.
        package_id: Package id of the document the block belongs to.

    Returns:
        The :class:`GeneratedFile` written.

    Raises:
        GeneratedFileError: If the file cannot be opened, written or closed.
    """
    path = Path(out_dir) / block_file_name(block)
    with _output(path, source=block.source, line=block.first_line) as handle:
        handle.write(f"// File '{block.source.resolve()}', line {block.first_line}\n\n")
        if not block.has_own_package:
            handle.write(f"package {samples_package(package_id)}\n\ntrait {block.sample_name} {{\n")
        for line in block.lines:
            handle.write(line + "\n")
        if not block.has_own_package:
            handle.write("\n}\n")
        handle.write(f"// end of sample #{block.index}\n")

    return GeneratedFile(path=path, block=block)


def write_aggregator(out_dir: str | Path, package_id: int, sample_names: Sequence[str]) -> Path:
    """Write the package object aggregating the wrapped samples of a document.

    The first sample is the parent of the package object and the following
    ones are mixed in with ``with``, in the given order.  The file is
    written even when *sample_names* is empty, so every document has
    exactly one aggregator.

    Args:
        out_dir: Existing output directory.
        package_id: Package id of the document, unique within the run.
        sample_names: Trait names of the wrapped samples, in discovery order.

    Returns:
        Path of the aggregator file.

    Raises:
        GeneratedFileError: If the file cannot be opened, written or closed.
    """
    path = Path(out_dir) / aggregator_file_name(package_id)

    with _output(path) as handle:
        handle.write(f"package {ROOT_PACKAGE}\n\npackage object samples{package_id}")
        for position, name in enumerate(sample_names):
            keyword = "extends" if position == 0 else "with"
            handle.write(f"\n  {keyword} {name}")
        handle.write(" { }\n")

    return path


@contextmanager
def _output(path: Path, *, source: Path | None = None, line: int | None = None) -> Iterator[TextIO]:
    """Open *path* for writing, flushing and closing it on every exit path."""
    try:
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            yield handle
            handle.flush()
    except OSError as exc:
        raise GeneratedFileError(path, source=source, line=line, reason=str(exc)) from exc
