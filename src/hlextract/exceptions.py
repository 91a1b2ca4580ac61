"""Custom exceptions for hlextract."""

from __future__ import annotations

from pathlib import Path


class HLExtractError(Exception):
    """Base exception for all hlextract errors."""

    pass


class ConfigurationError(HLExtractError):
    """Raised when extractor settings are invalid."""

    pass


class DocumentReadError(HLExtractError):
    """Raised when an input document cannot be read.

    Attributes:
        path: The document being read.
        line: 1-based line number reached before the failure, if known.
        reason: Underlying error message, if any.
    """

    def __init__(self, path: str | Path, line: int | None = None, reason: str | None = None) -> None:
        self.path = str(path)
        self.line = line
        self.reason = reason
        msg = f"Could not read document '{self.path}'"
        if line is not None:
            msg += f" (line {line})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class GeneratedFileError(HLExtractError):
    """Raised when a generated source file cannot be written.

    Attributes:
        path: The output file that failed.
        source: Document the block was extracted from, if any.
        line: 1-based line of the block in *source*, if any.
        reason: Underlying error message, if any.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        source: str | Path | None = None,
        line: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.path = str(path)
        self.source = str(source) if source is not None else None
        self.line = line
        self.reason = reason
        msg = f"Could not write generated file '{self.path}'"
        if self.source is not None:
            msg += f"\nSample from '{self.source}'"
            if line is not None:
                msg += f", line {line}"
        if reason:
            msg += f"\nReason: {reason}"
        super().__init__(msg)
