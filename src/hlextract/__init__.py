"""
hlextract: keep the code samples of your documentation compiling.

Scans documents for fenced Scala samples, writes each one to its own source
file, and adds one aggregator per document so that all the samples are
type-checked together by the regular test compilation.

Basic usage:
    from hlextract import extract_highlights, list_files

    sources = list_files("docs")
    generated = extract_highlights(sources, "target/hlextract")
"""

from __future__ import annotations

import logging

__version__ = "0.1.0"

# Configuration
from .config import (
    DisabledByEnv,
    EnabledByDefault,
    EnabledByEnv,
    ExtractorSettings,
    activated,
    parse_activation,
)

# Discovery
from .discovery import list_files

# Exceptions
from .exceptions import (
    ConfigurationError,
    DocumentReadError,
    GeneratedFileError,
    HLExtractError,
)

# Extraction
from .extractor import (
    ExtractionState,
    HighlightExtractor,
    extract_highlights,
    process_document,
)

# Build integration
from .integration import (
    doc_options,
    exclude_generated_mappings,
    generate_sources,
    looks_like_scala_project,
    watch_sources,
)
from .scanner import Block, scan_blocks
from .writer import GeneratedFile, write_aggregator, write_block

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Block",
    "ConfigurationError",
    "DisabledByEnv",
    "DocumentReadError",
    "EnabledByDefault",
    "EnabledByEnv",
    "ExtractionState",
    "ExtractorSettings",
    "GeneratedFile",
    "HLExtractError",
    "HighlightExtractor",
    "__version__",
    "activated",
    "doc_options",
    "exclude_generated_mappings",
    "extract_highlights",
    "generate_sources",
    "list_files",
    "looks_like_scala_project",
    "parse_activation",
    "process_document",
    "scan_blocks",
    "watch_sources",
    "write_aggregator",
    "write_block",
]
