"""
hlextract: command line entry point.

Usage:
  hlextract [DIRECTORY] [options]

Scans DIRECTORY (default: current directory) for Markdown documents,
extracts their Scala samples into the output directory, and prints the
path of every generated file.  The project directory (default: current
directory) must look like a Scala build unless --force is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import ExtractorSettings, parse_activation
from .exceptions import ConfigurationError, HLExtractError
from .integration import generate_sources, looks_like_scala_project

logger = logging.getLogger("hlextract")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hlextract",
        description="Extract code samples from documentation into compilable sources.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"hlextract {__version__}")
    parser.add_argument("directory", nargs="?", default=None, help="directory to scan (default: .)")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="directory receiving generated sources, relative to the project directory",
    )
    parser.add_argument(
        "--project-dir",
        default=None,
        help="root of the Scala build (default: current directory)",
    )
    parser.add_argument("--start-token", default=None, help='token starting a sample (default: "```scala")')
    parser.add_argument("--end-token", default=None, help='line ending a sample (default: "```")')
    parser.add_argument(
        "--include",
        action="append",
        default=None,
        metavar="GLOB",
        help="file name glob of documents to scan (repeatable, default: *.md)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="GLOB",
        help="file or directory name glob to skip (repeatable)",
    )
    parser.add_argument(
        "--activation",
        default="default",
        metavar="SPEC",
        help="'default', 'enabled-by-env:NAME' or 'disabled-by-env:NAME'",
    )
    parser.add_argument("--encoding", default=None, help="document encoding (default: utf-8)")
    parser.add_argument("--force", action="store_true", help="skip the Scala project check")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="log warnings and errors only")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send hlextract log records to stderr."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


def settings_from_args(args: argparse.Namespace) -> ExtractorSettings:
    return ExtractorSettings.from_env(
        start_token=args.start_token,
        end_token=args.end_token,
        directory=Path(args.directory) if args.directory else None,
        project_dir=Path(args.project_dir) if args.project_dir else None,
        output_dir=Path(args.output_dir) if args.output_dir else None,
        include=tuple(args.include) if args.include else None,
        exclude=tuple(args.exclude) if args.exclude else None,
        activation=parse_activation(args.activation),
        encoding=args.encoding,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        settings = settings_from_args(args)
        applies = args.force or looks_like_scala_project(settings.project_dir)
        generated = generate_sources(settings, applies=applies)
    except ConfigurationError as e:
        parser.error(str(e))
    except HLExtractError as e:
        print(f"hlextract: {e}", file=sys.stderr)
        return 1

    for path in generated:
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
