"""Property-based tests for the Markdown serializer.

Test Coverage:
- Property: Serialization never raises, for any tag and any options
- Property: Serialization does not modify the tree
- Property: Text of content-preserving elements survives in order
- Property: Tables always have a consistent column count
"""

import copy

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import is_subsequence

from chat2md.nodes import Element, Tag, TextNode, flatten_text
from chat2md.options import SerializerOptions
from chat2md.serializer import serialize
from chat2md.tables import serialize_table

# Tags whose serialization keeps every descendant character
PRESERVING_TAGS = [
    Tag.PARAGRAPH,
    Tag.BOLD,
    Tag.ITALIC,
    Tag.LINK,
    Tag.INLINE_CODE,
    Tag.BLOCKQUOTE,
    Tag.UNKNOWN,
    Tag.LIST_ITEM,
    Tag.H1,
    Tag.H3,
    Tag.H6,
]

text_nodes = st.builds(TextNode, st.text(max_size=20))
attrs = st.dictionaries(st.sampled_from(["href", "language"]), st.text(max_size=10), max_size=2)


def _element_strategy(tags):
    return st.recursive(
        text_nodes,
        lambda children: st.builds(
            Element,
            tag=st.sampled_from(tags),
            children=st.lists(children, max_size=4),
            attrs=attrs,
        ),
        max_leaves=30,
    )


any_nodes = _element_strategy(list(Tag))
preserving_nodes = _element_strategy(PRESERVING_TAGS)
options = st.builds(
    SerializerOptions,
    escape_special=st.booleans(),
    flatten_list_items=st.booleans(),
    max_depth=st.integers(min_value=1, max_value=10),
)


def _non_whitespace(text: str) -> str:
    return "".join(text.split())


@pytest.mark.unit
class TestSerializerProperties:
    """Property-based tests for serialize."""

    @given(any_nodes, options)
    def test_total(self, node, opts):
        """Property: Any tree serializes to a string."""
        assert isinstance(serialize(node, opts), str)

    @given(any_nodes, options)
    def test_does_not_mutate(self, node, opts):
        """Property: The input tree is unchanged after serialization."""
        before = copy.deepcopy(node)
        serialize(node, opts)
        assert node == before

    @given(any_nodes)
    def test_deterministic(self, node):
        """Property: Serializing twice gives the same output."""
        assert serialize(node) == serialize(node)

    @given(preserving_nodes)
    def test_text_preserved_in_order(self, node):
        """Property: Visible characters of preserving elements appear in order."""
        result = serialize(node)
        assert is_subsequence(_non_whitespace(flatten_text(node)), _non_whitespace(result))


@pytest.mark.unit
class TestTableProperties:
    """Property-based tests for serialize_table."""

    @given(st.lists(st.lists(st.text(alphabet="abc xyz", max_size=5), min_size=1, max_size=5), min_size=1, max_size=6))
    def test_consistent_columns(self, rows):
        """Property: Every line has the same number of cells."""
        col_count = max(len(row) for row in rows)
        lines = serialize_table(rows).split("\n")
        assert len(lines) == len(rows) + 1
        assert all(line.count("|") == col_count + 1 for line in lines)
        assert lines[1] == "| " + " | ".join(["---"] * col_count) + " |"
