"""Command-line interface for projexport.

This module starts the export web service: it parses the command line, builds
the session configuration, optionally pre-loads a project, and runs the
FastAPI application under uvicorn until interrupted.

Exit Codes:
    0: Server stopped normally
    1: Runtime error (bad configuration, missing tokenizer, server failure)
    2: Command-line syntax error

Example:
    # Serve the UI on http://127.0.0.1:3000 with a project pre-loaded
    $ projexport /path/to/project

    # Display version information
    $ projexport --version
"""

import logging
import sys
import threading
import webbrowser

import uvicorn

from projexport.cli.argparser import build_config, create_parser, validate_args
from projexport.exceptions import TokenizerNotAvailableError
from projexport.session import ExportSession
from projexport.web.app import create_app

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False, quiet: bool = False) -> int:
    """Set up root logging for the CLI and return the chosen level."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return level


def main() -> None:
    """Main entry point for the projexport command-line interface."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        validate_args(args)
        level = configure_logging(args.verbose, args.quiet)

        session = ExportSession(build_config(args))
        logger.debug("Configuration: %s", session.config)
        if args.directory is not None:
            session.load(args.directory)

        app = create_app(session)
        url = f"http://{args.host}:{args.port}"
        print(f"Project Exporter is running at {url}", file=sys.stderr)
        print(f"Exports are written to {session.config.output_dir.resolve()}", file=sys.stderr)

        if args.open_browser:
            threading.Timer(1.0, webbrowser.open, args=(url,)).start()

        uvicorn.run(app, host=args.host, port=args.port, log_level=logging.getLevelName(level).lower())

    except TokenizerNotAvailableError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print("Install it with one of:", file=sys.stderr)
        print('    pip install "projexport[token_counting]"', file=sys.stderr)
        print('    poetry add "projexport[token_counting]"', file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
