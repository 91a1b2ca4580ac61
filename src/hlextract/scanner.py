"""Line scanner locating fenced code samples in a document.

The scanner walks a document once, front to back, and yields a
:class:`Block` for every span between a start marker and an end marker.
It never rewinds the underlying iterator, so documents can be streamed
straight from an open file handle.

Matching rules:

* a line *containing* the start token opens a block;
* a line *equal to* the end token closes it;
* the end of the document closes an open block as well.

Neither marker line is part of the block content.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

PACKAGE_PREFIX = "package "
"""Prefix of a first content line that declares its own Scala package."""


@dataclass(frozen=True, slots=True)
class Block:
    """A code sample extracted from a document.

    Attributes:
        source: Document the sample was found in.
        line: 1-based line number of the start marker.
        index: Sequence index, unique across a whole extraction run.
        lines: Content lines, without the marker lines.
        has_own_package: Whether the first content line declares a package.
    """

    source: Path
    line: int
    index: int
    lines: tuple[str, ...]
    has_own_package: bool

    @property
    def first_line(self) -> int:
        """1-based line number of the first content line."""
        return self.line + 1

    @property
    def sample_name(self) -> str | None:
        """Name of the synthetic trait wrapping this block, if any."""
        if self.has_own_package:
            return None
        return f"Sample{self.index}"


def scan_blocks(
    lines: Iterable[str],
    start_token: str,
    end_token: str,
    *,
    source: str | Path,
    first_index: int = 0,
) -> Iterator[Block]:
    """Yield the code samples found in *lines*, in document order.

    Args:
        lines: Document lines, with or without trailing newlines.  The
            iterable is consumed exactly once.
        start_token: Substring marking the line before a sample.
        end_token: Exact line content terminating a sample.
        source: Path of the document, recorded on each block.
        first_index: Sequence index given to the first block; following
            blocks are numbered consecutively.

    Yields:
        One :class:`Block` per sample.  A sample left open at the end of
        the document is yielded with whatever content was read.
    """
    source = Path(source)
    cursor = iter(lines)
    index = first_index
    number = 0

    for raw in cursor:
        number += 1
        if start_token not in _chomp(raw):
            continue

        start_line = number
        content: list[str] = []
        for raw_content in cursor:
            number += 1
            text = _chomp(raw_content)
            if text == end_token:
                break
            content.append(text)

        yield Block(
            source=source,
            line=start_line,
            index=index,
            lines=tuple(content),
            has_own_package=bool(content) and content[0].startswith(PACKAGE_PREFIX),
        )
        index += 1


def _chomp(line: str) -> str:
    return line.rstrip("\r\n")
