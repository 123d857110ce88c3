"""
Tests for the input parser (raw groups → nodes + option flags).

We need to:
1. Tell markers, chains and units apart
2. Scan groups highest position first
3. Record group-level and per-node optionality
4. Stay idempotent when a group is parsed again
"""

import pytest

from cartesian_composition.declarations import Chain, Option, OptionsMarker, Unit
from cartesian_composition.examples import tracer
from cartesian_composition.model import GroupOptions
from cartesian_composition.parser import classify_declaration, parse_chain, parse_group

OPTIONAL = Option.OPTIONAL

a, b, c, i = tracer("a"), tracer("b"), tracer("c"), tracer("i")


class TestClassification:
    """Test classification of raw declarations."""

    def test_callable_is_unit(self):
        assert classify_declaration(a, 1) == Unit(fn=a)

    def test_numeric_array_first_is_marker(self):
        assert classify_declaration([OPTIONAL], 0) == OptionsMarker(codes=frozenset({1}))

    def test_numeric_strings_are_normalized(self):
        marker = classify_declaration(["1", 2.0], 0)
        assert marker.codes == frozenset({1, 2})

    def test_numeric_array_not_first_is_chain(self):
        declaration = classify_declaration([1], 1)
        assert isinstance(declaration, Chain)
        assert declaration.units == (1,)

    def test_array_of_callables_is_chain(self):
        assert classify_declaration([a, b], 0) == Chain(units=(a, b))

    def test_chain_with_marker(self):
        chain = parse_chain([[OPTIONAL], i])
        assert chain.units == (i,)
        assert chain.marker.has(OPTIONAL)

    def test_chain_without_marker(self):
        assert parse_chain([a]).marker is None


class TestParseGroup:
    """Test parsing of whole groups."""

    def test_nodes_highest_position_first(self):
        parsed = parse_group(0, [a, b, c])
        assert [n.position for n in parsed.nodes] == [2, 1, 0]
        assert [n.units for n in parsed.nodes] == [(c,), (b,), (a,)]

    def test_positions_count_marker_slot(self):
        parsed = parse_group(1, [[OPTIONAL], a, b])
        assert [n.position for n in parsed.nodes] == [2, 1]
        assert all(n.group_index == 1 for n in parsed.nodes)
        assert parsed.options.has_option(OPTIONAL)

    def test_chain_marker_recorded_per_position(self):
        parsed = parse_group(2, [a, [[OPTIONAL], i]])
        assert parsed.options.optional_positions == [1]
        assert not parsed.options.has_option(OPTIONAL)
        chain_node = parsed.nodes[0]
        assert chain_node.position == 1
        assert chain_node.units == (i,)
        assert parsed.is_optional(chain_node)
        assert not parsed.is_optional(parsed.nodes[1])

    def test_chain_units_flattened_into_node(self):
        parsed = parse_group(0, [[a, b], c])
        assert parsed.nodes[1].units == (a, b)

    def test_tuple_group_accepted(self):
        assert len(parse_group(0, (a, b)).nodes) == 2

    def test_parsing_twice_is_idempotent(self):
        options = GroupOptions(group_index=0)
        group = [[OPTIONAL], a, [[OPTIONAL], b]]
        first = parse_group(0, group, options)
        second = parse_group(0, group, options)
        assert first.nodes == second.nodes
        assert options.group_codes == {1}
        assert options.node_codes == {2: {1}}

    def test_marker_only_group_is_empty_and_warns(self):
        with pytest.warns(UserWarning, match="Group 0"):
            parsed = parse_group(0, [[OPTIONAL]])
        assert parsed.is_empty

    def test_empty_group_warns(self):
        with pytest.warns(UserWarning):
            assert parse_group(3, []).is_empty

    def test_non_array_group_raises(self):
        with pytest.raises(TypeError, match="Group 0"):
            parse_group(0, a)
