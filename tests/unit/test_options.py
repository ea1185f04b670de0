#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for option dataclasses."""

from dataclasses import FrozenInstanceError

import pytest

from chat2md.options import ExportOptions, SerializerOptions


@pytest.mark.unit
class TestSerializerOptions:
    """Test SerializerOptions."""

    def test_defaults(self):
        """Test the default values."""
        options = SerializerOptions()
        assert options.escape_special is False
        assert options.flatten_list_items is True
        assert options.max_depth == 200

    def test_frozen(self):
        """Test that options cannot be modified in place."""
        options = SerializerOptions()
        with pytest.raises(FrozenInstanceError):
            options.max_depth = 5  # type: ignore[misc]

    def test_create_updated(self):
        """Test that create_updated returns a modified copy."""
        options = SerializerOptions()
        updated = options.create_updated(escape_special=True)
        assert updated.escape_special is True
        assert options.escape_special is False
        assert updated.max_depth == options.max_depth

    @pytest.mark.parametrize("value", [0, -3])
    def test_invalid_max_depth(self, value):
        """Test that non-positive depth limits are rejected."""
        with pytest.raises(ValueError, match="max_depth"):
            SerializerOptions(max_depth=value)

    def test_create_updated_validates(self):
        """Test that updated copies are validated too."""
        with pytest.raises(ValueError):
            SerializerOptions().create_updated(max_depth=0)


@pytest.mark.unit
class TestExportOptions:
    """Test ExportOptions."""

    def test_defaults(self):
        """Test the default values."""
        options = ExportOptions()
        assert options.preamble == "agent: ChatGPT"
        assert options.filename_prefix == "ChatGPT"
        assert options.html_parser == "html.parser"
        assert options.serializer_options == SerializerOptions()

    def test_serializer_options_not_shared(self):
        """Test that each instance gets its own default serializer options."""
        assert ExportOptions().serializer_options is not ExportOptions().serializer_options

    @pytest.mark.parametrize("prefix", ["", "a/b", "a\\b"])
    def test_invalid_prefix(self, prefix):
        """Test that unusable filename prefixes are rejected."""
        with pytest.raises(ValueError, match="filename_prefix"):
            ExportOptions(filename_prefix=prefix)

    def test_no_preamble(self):
        """Test that the preamble can be disabled."""
        assert ExportOptions(preamble=None).preamble is None

    def test_help_metadata(self):
        """Test that every simple field carries help text for the CLI."""
        from dataclasses import fields

        for option_class in (ExportOptions, SerializerOptions):
            for f in fields(option_class):
                if f.name != "serializer_options":
                    assert f.metadata.get("help"), f.name
