"""Unit tests for CLI argument parsing and option resolution."""

import argparse

import pytest

from chat2md.cli.builder import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_VALIDATION_ERROR,
    build_export_options,
    create_parser,
    env_key,
    get_exit_code_for_exception,
    parse_bool,
    resolve_setting,
)
from chat2md.exceptions import (
    Chat2MdError,
    InputFileNotFoundError,
    NoTurnsFoundError,
    OutputWriteError,
    ValidationError,
)
from chat2md.options import ExportOptions, SerializerOptions


@pytest.mark.unit
@pytest.mark.cli
class TestParseBool:
    """Test boolean parsing for environment and config values."""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on", True])
    def test_true_values(self, value):
        """Test accepted true spellings."""
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off", False])
    def test_false_values(self, value):
        """Test accepted false spellings."""
        assert parse_bool(value) is False

    @pytest.mark.parametrize("value", ["maybe", "", "2"])
    def test_invalid(self, value):
        """Test that anything else is rejected."""
        with pytest.raises(ValueError):
            parse_bool(value)


@pytest.mark.unit
@pytest.mark.cli
class TestResolveSetting:
    """Test setting priority."""

    def test_env_key(self):
        """Test environment variable names."""
        assert env_key("max_depth") == "CHAT2MD_MAX_DEPTH"
        assert env_key("output-dir") == "CHAT2MD_OUTPUT_DIR"

    def test_cli_first(self, isolated_env, monkeypatch):
        """Test that command-line values win."""
        monkeypatch.setenv("CHAT2MD_PREAMBLE", "env")
        assert resolve_setting("preamble", "cli", {"preamble": "config"}, "default") == "cli"

    def test_env_second(self, isolated_env, monkeypatch):
        """Test that environment values beat the config file."""
        monkeypatch.setenv("CHAT2MD_MAX_DEPTH", "12")
        assert resolve_setting("max_depth", None, {"max_depth": 3}, 200, int) == 12

    def test_config_third(self, isolated_env):
        """Test that config values beat the default."""
        assert resolve_setting("max_depth", None, {"max_depth": "3"}, 200, int) == 3

    def test_default_last(self, isolated_env):
        """Test the fallback to the default."""
        assert resolve_setting("max_depth", None, {"max_depth": None}, 200, int) == 200

    def test_bad_env_value(self, isolated_env, monkeypatch):
        """Test that conversion failures name the variable."""
        monkeypatch.setenv("CHAT2MD_MAX_DEPTH", "deep")
        with pytest.raises(ValueError, match="CHAT2MD_MAX_DEPTH"):
            resolve_setting("max_depth", None, {}, 200, int)

    def test_bad_config_value(self, isolated_env):
        """Test that config conversion failures name the key."""
        with pytest.raises(ValueError, match="max_depth"):
            resolve_setting("max_depth", None, {"max_depth": "deep"}, 200, int)


@pytest.mark.unit
@pytest.mark.cli
class TestCreateParser:
    """Test the argument parser."""

    def test_defaults(self):
        """Test parsing only the input."""
        args = create_parser().parse_args(["page.html"])
        assert args.input == "page.html"
        assert args.out is None
        assert args.stdout is False
        assert args.escape_special is None
        assert args.flatten_list_items is None
        assert args.max_depth is None
        assert args.log_level == "WARNING"

    def test_boolean_flags(self):
        """Test the paired boolean flags."""
        args = create_parser().parse_args(["p", "--escape-special", "--no-flatten-list-items"])
        assert args.escape_special is True
        assert args.flatten_list_items is False

    def test_preamble_exclusive(self):
        """Test that --preamble and --no-preamble conflict."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["p", "--preamble", "x", "--no-preamble"])

    def test_requires_input(self):
        """Test that the input argument is required."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])


@pytest.mark.unit
@pytest.mark.cli
class TestBuildExportOptions:
    """Test building ExportOptions from arguments and config."""

    def _parse(self, *argv: str) -> argparse.Namespace:
        return create_parser().parse_args(["page.html", *argv])

    def test_defaults(self, isolated_env):
        """Test that no settings give the default options."""
        assert build_export_options(self._parse(), {}) == ExportOptions()

    def test_cli_values(self, isolated_env):
        """Test command-line values."""
        options = build_export_options(
            self._parse("--preamble", "hi", "--filename-prefix", "chat", "--escape-special", "--max-depth", "9"),
            {},
        )
        assert options.preamble == "hi"
        assert options.filename_prefix == "chat"
        assert options.serializer_options == SerializerOptions(escape_special=True, max_depth=9)

    def test_config_values(self, isolated_env):
        """Test values from a config mapping."""
        config = {"flatten_list_items": False, "html_parser": "html.parser", "max_depth": 50}
        options = build_export_options(self._parse(), config)
        assert options.serializer_options.flatten_list_items is False
        assert options.serializer_options.max_depth == 50

    def test_no_preamble_beats_config(self, isolated_env):
        """Test that --no-preamble wins over a configured preamble."""
        options = build_export_options(self._parse("--no-preamble"), {"preamble": "configured"})
        assert options.preamble is None

    def test_empty_preamble(self, isolated_env):
        """Test that an empty preamble means no preamble."""
        assert build_export_options(self._parse(), {"preamble": ""}).preamble is None

    def test_invalid_value(self, isolated_env):
        """Test that invalid values raise ValueError."""
        with pytest.raises(ValueError):
            build_export_options(self._parse(), {"escape_special": "sometimes"})


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodeMapping:
    """Test exception to exit code mapping."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (ValidationError("x"), EXIT_VALIDATION_ERROR),
            (InputFileNotFoundError("x"), EXIT_FILE_ERROR),
            (NoTurnsFoundError(), EXIT_PARSING_ERROR),
            (OutputWriteError("x"), EXIT_RENDERING_ERROR),
            (Chat2MdError("x"), EXIT_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, error, code):
        """Test each exception family."""
        assert get_exit_code_for_exception(error) == code
