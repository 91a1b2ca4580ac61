"""Extraction of code samples from a batch of documents.

:func:`extract_highlights` processes documents strictly in the given order.
The run state (next sequence index, next package id, and everything
generated so far) lives in an explicit :class:`ExtractionState` passed to
:func:`process_document` for each document, so generated names stay unique
across the whole batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from .exceptions import DocumentReadError, GeneratedFileError
from .scanner import scan_blocks
from .writer import block_file_name, write_aggregator, write_block

logger = logging.getLogger(__name__)

DEFAULT_START_TOKEN = "```scala"
DEFAULT_END_TOKEN = "```"


@dataclass(slots=True)
class ExtractionState:
    """Accumulated state of an extraction run.

    Attributes:
        next_index: Sequence index of the next sample.
        next_package_id: Package id of the next document.
        generated: Paths of all files generated so far (samples and
            aggregators), in generation order.
        samples: Names of all wrapped samples generated so far.
    """

    next_index: int = 0
    next_package_id: int = 0
    generated: list[Path] = field(default_factory=list)
    samples: list[str] = field(default_factory=list)


class _DocumentLines:
    """Forward-only iterator over an open document, counting the lines read."""

    def __init__(self, handle: TextIO) -> None:
        self._handle = handle
        self.count = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = next(self._handle)
        self.count += 1
        return line


def process_document(
    path: str | Path,
    out_dir: str | Path,
    state: ExtractionState,
    *,
    start_token: str = DEFAULT_START_TOKEN,
    end_token: str = DEFAULT_END_TOKEN,
    encoding: str = "utf-8",
    log: logging.Logger | None = None,
) -> list[Path]:
    """Extract the samples of one document and write its aggregator.

    Every block found gets the next sequence index from *state*; the
    document itself takes the next package id.  *state* is updated in
    place with the new counters, paths, and sample names.

    Args:
        path: Document to scan.
        out_dir: Existing output directory.
        state: Run state shared by all documents of the batch.
        start_token: Substring marking the start of a sample.
        end_token: Exact line ending a sample.
        encoding: Text encoding of the document.
        log: Logger receiving progress messages (default: module logger).

    Returns:
        Paths generated for this document: one per sample, followed by
        the aggregator.

    Raises:
        DocumentReadError: If the document cannot be opened or decoded.
        GeneratedFileError: If an output file cannot be written.
    """
    log = log or logger
    path = Path(path)
    package_id = state.next_package_id
    next_index = state.next_index
    generated: list[Path] = []
    samples: list[str] = []
    reader: _DocumentLines | None = None

    try:
        with path.open("r", encoding=encoding) as handle:
            reader = _DocumentLines(handle)
            blocks = scan_blocks(reader, start_token, end_token, source=path, first_index=next_index)
            for block in blocks:
                log.debug("Generating the sample #%d (%s) ...", block.index, block_file_name(block))
                sample = write_block(block, out_dir, package_id=package_id)
                generated.append(sample.path)
                if sample.sample_name is not None:
                    samples.append(sample.sample_name)
                next_index = block.index + 1
    except (OSError, UnicodeDecodeError) as exc:
        line = reader.count + 1 if reader is not None else None
        raise DocumentReadError(path, line=line, reason=str(exc)) from exc

    generated.append(write_aggregator(out_dir, package_id, samples))
    state.next_index = next_index
    state.next_package_id = package_id + 1
    state.generated.extend(generated)
    state.samples.extend(samples)
    return generated


def extract_highlights(
    sources: Sequence[str | Path],
    out_dir: str | Path,
    *,
    start_token: str = DEFAULT_START_TOKEN,
    end_token: str = DEFAULT_END_TOKEN,
    encoding: str = "utf-8",
    log: logging.Logger | None = None,
    state: ExtractionState | None = None,
) -> list[Path]:
    """Extract the samples of every document in *sources*.

    Documents are processed in order; the first failure aborts the run.

    Args:
        sources: Documents to scan, in a stable order.
        out_dir: Output directory, created if missing.
        start_token: Substring marking the start of a sample.
        end_token: Exact line ending a sample.
        encoding: Text encoding of the documents.
        log: Logger receiving progress messages (default: module logger).
        state: Optional run state to continue from; a fresh one is used
            when ``None``.

    Returns:
        Every generated path (samples and aggregators), to be compiled
        together.

    Raises:
        DocumentReadError: If a document cannot be read.
        GeneratedFileError: If an output file cannot be written or the
            output directory cannot be created.
    """
    log = log or logger
    state = state if state is not None else ExtractionState()
    out_dir = Path(out_dir)

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GeneratedFileError(out_dir, reason=str(exc)) from exc

    for source in sources:
        log.info("Processing %s ...", source)
        generated = process_document(
            source,
            out_dir,
            state,
            start_token=start_token,
            end_token=end_token,
            encoding=encoding,
            log=log,
        )
        log.debug("Generated %d file(s) from %s", len(generated), source)

    return state.generated


class HighlightExtractor:
    """Reusable extraction job over a fixed list of documents.

    Example::

        extractor = HighlightExtractor(["README.md"], "target/samples")
        paths = extractor()
        print(extractor.state.samples)
    """

    def __init__(
        self,
        sources: Sequence[str | Path],
        out_dir: str | Path,
        start_token: str = DEFAULT_START_TOKEN,
        end_token: str = DEFAULT_END_TOKEN,
        log: logging.Logger | None = None,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self.sources = [Path(s) for s in sources]
        self.out_dir = Path(out_dir)
        self.start_token = start_token
        self.end_token = end_token
        self.log = log or logger
        self.encoding = encoding
        self.state: ExtractionState | None = None

    def run(self) -> list[Path]:
        """Run the extraction and return the generated paths."""
        self.state = ExtractionState()
        return extract_highlights(
            self.sources,
            self.out_dir,
            start_token=self.start_token,
            end_token=self.end_token,
            encoding=self.encoding,
            log=self.log,
            state=self.state,
        )

    __call__ = run

    def __repr__(self) -> str:
        return f"HighlightExtractor({len(self.sources)} source(s) -> {self.out_dir})"
