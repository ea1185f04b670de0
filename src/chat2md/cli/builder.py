#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser, option resolution and exit codes for the chat2md CLI.

Each setting is resolved from, in decreasing priority: the command line, a
``CHAT2MD_<NAME>`` environment variable, the configuration file, and the
dataclass default.
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import fields
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Callable, Mapping

from chat2md.constants import ENV_PREFIX
from chat2md.exceptions import FileError, ParsingError, RenderingError, ValidationError
from chat2md.options import ExportOptions, SerializerOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: Any) -> bool:
    """Interpret a boolean from an environment variable or config value.

    Raises
    ------
    ValueError
        If the value is not a recognizable boolean

    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean, got {value!r}")


def env_key(name: str) -> str:
    """Return the environment variable consulted for setting ``name``."""
    return f"{ENV_PREFIX}{name.upper().replace('-', '_').replace('.', '_')}"


def resolve_setting(
    name: str,
    cli_value: Any,
    config: Mapping[str, Any],
    default: Any,
    convert: Callable[[Any], Any] = str,
) -> Any:
    """Resolve one setting from CLI, environment, config file and default.

    Raises
    ------
    ValueError
        If an environment or config value cannot be converted

    """
    if cli_value is not None:
        return cli_value

    env_value = os.environ.get(env_key(name))
    if env_value is not None:
        try:
            return convert(env_value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid environment variable {env_key(name)}={env_value!r}: {e}") from e

    if name in config and config[name] is not None:
        try:
            return convert(config[name])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid config value for '{name}': {e}") from e

    return default


def _get_version() -> str:
    try:
        return version("chat2md")
    except PackageNotFoundError:
        return "unknown"


def create_parser() -> argparse.ArgumentParser:
    """Build the ``chat2md`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="chat2md",
        description="Export a saved chat conversation page as a Markdown transcript.",
        epilog=f"Settings can also come from {ENV_PREFIX}<OPTION> environment variables or a .chat2md.toml file.",
    )
    parser.add_argument("input", help="Saved conversation page (HTML), or '-' to read from stdin")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")

    output_group = parser.add_argument_group("output")
    destination = output_group.add_mutually_exclusive_group()
    destination.add_argument("-o", "--out", help="Write the transcript to this file")
    destination.add_argument("--output-dir", help="Directory for a timestamped transcript file (default: cwd)")
    destination.add_argument("--stdout", action="store_true", help="Print the transcript instead of writing a file")

    export_fields = {f.name: f for f in fields(ExportOptions)}
    transcript_group = parser.add_argument_group("transcript")
    preamble = transcript_group.add_mutually_exclusive_group()
    preamble.add_argument("--preamble", help=export_fields["preamble"].metadata["help"])
    preamble.add_argument("--no-preamble", action="store_true", help="Omit the preamble line")
    transcript_group.add_argument("--filename-prefix", help=export_fields["filename_prefix"].metadata["help"])
    transcript_group.add_argument(
        "--html-parser",
        choices=export_fields["html_parser"].metadata["choices"],
        help=export_fields["html_parser"].metadata["help"],
    )

    serializer_fields = {f.name: f for f in fields(SerializerOptions)}
    serializer_group = parser.add_argument_group("serializer")
    serializer_group.add_argument(
        "--escape-special",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=serializer_fields["escape_special"].metadata["help"],
    )
    serializer_group.add_argument(
        "--flatten-list-items",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=serializer_fields["flatten_list_items"].metadata["help"],
    )
    serializer_group.add_argument(
        "--max-depth",
        type=int,
        help=serializer_fields["max_depth"].metadata["help"],
    )

    config_group = parser.add_argument_group("configuration and logging")
    config_group.add_argument("--config", help="Configuration file (default: discovered .chat2md.* or pyproject.toml)")
    config_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    config_group.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    config_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    config_group.add_argument("--log-file", help="Also write log output to this file")

    return parser


def build_export_options(parsed_args: argparse.Namespace, config: Mapping[str, Any]) -> ExportOptions:
    """Combine parsed arguments and configuration into ``ExportOptions``.

    Raises
    ------
    ValueError
        If a resolved value is invalid

    """
    serializer_defaults = SerializerOptions()
    serializer_options = SerializerOptions(
        escape_special=resolve_setting(
            "escape_special", parsed_args.escape_special, config, serializer_defaults.escape_special, parse_bool
        ),
        flatten_list_items=resolve_setting(
            "flatten_list_items",
            parsed_args.flatten_list_items,
            config,
            serializer_defaults.flatten_list_items,
            parse_bool,
        ),
        max_depth=resolve_setting("max_depth", parsed_args.max_depth, config, serializer_defaults.max_depth, int),
    )

    defaults = ExportOptions()
    if parsed_args.no_preamble:
        preamble = None
    else:
        preamble = resolve_setting("preamble", parsed_args.preamble, config, defaults.preamble)
        if isinstance(preamble, str) and not preamble:
            preamble = None

    return ExportOptions(
        preamble=preamble,
        filename_prefix=resolve_setting(
            "filename_prefix", parsed_args.filename_prefix, config, defaults.filename_prefix
        ),
        html_parser=resolve_setting("html_parser", parsed_args.html_parser, config, defaults.html_parser),
        serializer_options=serializer_options,
    )


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR
