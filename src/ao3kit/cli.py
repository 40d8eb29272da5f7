"""Command-line interface for ao3kit chapter rendering.

This module provides a simple CLI tool for rendering a chapter body to
terminal text. The chapter comes from a local HTML file, standard input, or
the archive itself when a work and chapter ID are given.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/ao3kit/cli.py

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from ao3kit.api import render_chapter_text
from ao3kit.client import Ao3Client
from ao3kit.constants import USER_AGENT_ENV_VAR
from ao3kit.exceptions import Ao3KitError, FetchError, ParsingError, ValidationError
from ao3kit.logging_utils import configure_logging, resolve_log_level
from ao3kit.options.client import ClientOptions
from ao3kit.options.plaintext import PlainTextOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_NETWORK_ERROR = 8


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, FetchError):
        return EXIT_NETWORK_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``ao3kit`` command."""
    parser = argparse.ArgumentParser(
        prog="ao3kit",
        description="Render an archive chapter body to plain or ANSI-styled terminal text.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Chapter HTML file, or '-' to read from standard input",
    )
    parser.add_argument("--work-id", type=int, help="Fetch this work from the archive instead of reading INPUT")
    parser.add_argument("--chapter-id", type=int, help="Chapter of --work-id to fetch")
    parser.add_argument("--skin-css", help="Work skin stylesheet used to resolve class colors")
    parser.add_argument("--ansi", action="store_true", help="Emit ANSI color and style escape sequences")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Enable trace logging with timestamps and logger names")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Configure logging from parsed command-line arguments."""
    log_level = logging.DEBUG if parsed_args.trace else resolve_log_level(parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _validate_arguments(parsed_args: argparse.Namespace) -> None:
    """Check that exactly one chapter source was given.

    Raises
    ------
    ValidationError
        If the arguments name no source, two sources, or half a work reference

    """
    fetching = parsed_args.work_id is not None or parsed_args.chapter_id is not None
    if fetching and (parsed_args.work_id is None or parsed_args.chapter_id is None):
        raise ValidationError(
            "--work-id and --chapter-id must be given together",
            parameter_name="chapter_id" if parsed_args.chapter_id is None else "work_id",
        )
    if fetching and parsed_args.input:
        raise ValidationError("INPUT cannot be combined with --work-id/--chapter-id", parameter_name="input")
    if not fetching and not parsed_args.input:
        raise ValidationError("Input file is required", parameter_name="input")


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _load_chapter(parsed_args: argparse.Namespace) -> tuple[str, Optional[str]]:
    """Return the chapter body HTML and work skin CSS to render."""
    skin_css = _read_input(parsed_args.skin_css) if parsed_args.skin_css else None

    if parsed_args.work_id is None:
        return _read_input(parsed_args.input), skin_css

    options = ClientOptions()
    user_agent = os.environ.get(USER_AGENT_ENV_VAR)
    if user_agent:
        options = options.create_updated(user_agent=user_agent)

    with Ao3Client(options) as client:
        chapter = client.get_chapter(parsed_args.work_id, parsed_args.chapter_id)

    logger.info(f"Fetched chapter {chapter.chapter_id} of work {chapter.work_id}: {chapter.title!r}")
    return chapter.content_html, skin_css if skin_css is not None else chapter.work_skin_css


def main(args: Optional[list[str]] = None) -> int:
    """Execute main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        _validate_arguments(parsed_args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        _setup_logging_level(parsed_args)
        html, skin_css = _load_chapter(parsed_args)
        text = render_chapter_text(html, work_skin_css=skin_css, options=PlainTextOptions(use_ansi=parsed_args.ansi))
    except (Ao3KitError, OSError) as e:
        logger.debug("Rendering failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    print(text)
    return EXIT_SUCCESS
