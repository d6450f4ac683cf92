"""Command-line argument parsing for projexport.

This module defines the command-line interface that configures and starts the
export web service, handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from projexport import __version__
from projexport.config import ENCODING_ERROR_HANDLERS, ExporterConfig
from projexport.exclusion_rules.name_rules import DEFAULT_EXCLUSION_NAMES


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with projexport's options.
    """
    description = """
    projexport: browse a project in your browser and export selected files to one text file.

    The tool starts a local web server. Load a directory, tick the files and folders
    you want, and export them: the output holds the project tree, with the selection
    marked, followed by the full text of every selected file.
    """

    epilog = f"""
    Examples:
      # Start the server on the default port (3000)
      projexport

      # Pre-load a project and open the browser
      projexport --open-browser /path/to/project

      # Add names to the default exclusions ({", ".join(DEFAULT_EXCLUSION_NAMES)})
      projexport -i __pycache__ -i .venv /path/to/project

      # Start without any default exclusions
      projexport --no-default-ignores /path/to/project

      # Write exports somewhere else and count tokens
      projexport -o ~/exports -t gpt-4 /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="projexport",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"projexport {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        help="Project directory to load on startup. A different one can be loaded from the browser.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to listen on (default: 127.0.0.1).")
    parser.add_argument("-p", "--port", type=int, default=3000, help="Port to listen on (default: 3000).")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        metavar="DIR",
        default=Path("exports"),
        help="Directory receiving export files (default: ./exports).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        metavar="NAME",
        action="append",
        default=[],
        help=(
            "File or directory name to exclude by default, in addition to the built-in ones. "
            "Names are matched literally against every entry's base name. Can be specified multiple times."
        ),
    )
    parser.add_argument(
        "--no-default-ignores",
        action="store_true",
        help="Do not exclude the built-in names by default.",
    )
    parser.add_argument("--encoding", default="utf-8", help="Encoding used to read project files (default: utf-8).")
    parser.add_argument(
        "--encoding-errors",
        choices=ENCODING_ERROR_HANDLERS,
        default="replace",
        help="How to handle bytes that can't be decoded (default: replace).",
    )
    parser.add_argument(
        "-t",
        "--tokenizer",
        metavar="MODEL",
        help="Tokenizer model used to count tokens in exports (e.g., gpt-4). Requires the token_counting extra.",
    )
    parser.add_argument("--open-browser", action="store_true", help="Open the UI in the default web browser.")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debugging information.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if not 0 < args.port < 65536:
        raise ValueError(f"Port must be between 1 and 65535, got {args.port}")
    if args.directory is not None and not args.directory.is_dir():
        raise ValueError(f"'{args.directory}' is not a valid directory")


def build_config(args: argparse.Namespace) -> ExporterConfig:
    """Translate parsed arguments into an ExporterConfig."""
    exclusions = [] if args.no_default_ignores else list(DEFAULT_EXCLUSION_NAMES)
    for name in args.ignore:
        if name not in exclusions:
            exclusions.append(name)
    return ExporterConfig(
        output_dir=args.output_dir.expanduser(),
        default_exclusions=tuple(exclusions),
        encoding=args.encoding,
        encoding_errors=args.encoding_errors,
        tokenizer_model=args.tokenizer,
    )
