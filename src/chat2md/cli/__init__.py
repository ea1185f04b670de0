#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for exporting chat pages to Markdown.

Examples
--------
Export a saved page to a timestamped file in the current directory::

    $ chat2md conversation.html

Choose the output file or directory::

    $ chat2md conversation.html --out notes/chat.md
    $ chat2md conversation.html --output-dir ./exports

Print the transcript and keep inline formatting in list items::

    $ chat2md conversation.html --stdout --no-flatten-list-items

Use environment variables for defaults::

    $ export CHAT2MD_OUTPUT_DIR=./exports
    $ export CHAT2MD_PREAMBLE="agent: ChatGPT 5"
    $ chat2md conversation.html

"""

import argparse
import logging
import os
import sys
from typing import cast

from chat2md.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_export_options,
    create_parser,
    get_exit_code_for_exception,
    resolve_setting,
)
from chat2md.cli.config import load_config_with_priority
from chat2md.constants import CONFIG_ENV_VAR
from chat2md.conversation import convert_page, export_page, read_page
from chat2md.exceptions import Chat2MdError
from chat2md.logging_utils import configure_logging, resolve_log_level

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    """Set up logging from --log-level, --verbose, --trace and --log-file."""
    log_level = resolve_log_level(parsed_args.log_level, verbose=parsed_args.verbose, trace=parsed_args.trace)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(parsed_args: argparse.Namespace) -> tuple[str, str]:
    if parsed_args.input == "-":
        return sys.stdin.read(), "<stdin>"
    return read_page(parsed_args.input), cast(str, parsed_args.input)


def main(args: list[str] | None = None) -> int:
    """Run the chat2md command line and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging(parsed_args)

    try:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        options = build_export_options(parsed_args, config)
        output_dir = resolve_setting("output_dir", parsed_args.output_dir, config, None)
    except (argparse.ArgumentTypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        html, source = _read_input(parsed_args)
        if parsed_args.stdout:
            sys.stdout.write(convert_page(html, options, source=source))
            return EXIT_SUCCESS
        written = export_page(
            html,
            output_path=parsed_args.out,
            output_dir=output_dir,
            options=options,
            source=source,
        )
    except Chat2MdError as e:
        logger.debug("Export failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected export failure", exc_info=True)
        print(f"Error: Unexpected error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(f"Exported {source} to {written}")
    return EXIT_SUCCESS
