"""
Tests for the Composition Analyzer.

Tests verify that the analyzer correctly:
    - Inventories groups, nodes and optional flags
    - Counts full, reduced and skipped compositions
    - Plans compositions in engine order without calling units
    - Flags empty groups and large expansions
"""

import pytest

from cartesian_composition import OPTIONAL, compose_cartesian
from cartesian_composition import analyzer
from cartesian_composition.analyzer import analyze_groups
from cartesian_composition.examples import build_example_groups, build_plain_groups, tracer


def exploding(*args):
    raise AssertionError("units must not be called during analysis")


def test_no_groups():
    report = analyze_groups()
    assert report.total_groups == 0
    assert report.total_compositions == 0
    assert report.plan == []


def test_plain_groups_inventory():
    report = analyze_groups(*build_plain_groups())
    assert report.total_groups == 3
    assert report.nodes_per_group == [3, 4, 2]
    assert report.optional_groups == []
    assert report.optional_positions == {}
    assert report.full_compositions == 24
    assert report.reduced_compositions == 0
    assert report.warnings == []


def test_example_groups_counts():
    report = analyze_groups(*build_example_groups())
    assert report.optional_groups == [1]
    assert report.optional_positions == {2: [1]}
    assert report.full_compositions == 24
    assert report.reduced_compositions == 21
    assert report.skipped_duplicates == 27
    assert report.total_compositions == 45


def test_total_matches_engine():
    groups = build_example_groups()
    report = analyze_groups(*groups)
    assert report.total_compositions == len(compose_cartesian(*groups)(1, 2, 3))


def test_plan_order():
    report = analyze_groups(*build_example_groups())
    first = report.plan[:6]
    assert [e.keys for e in first] == [
        ((0, 0), (1, 1), (2, 0)),
        ((0, 0), (2, 0)),
        ((0, 0), (1, 1), (2, 1)),
        ((0, 0), (2, 1)),
        ((0, 0), (1, 1)),
        ((0, 0),),
    ]
    assert [e.omitted for e in first] == [(), (1,), (), (1,), (2,), (1, 2)]
    assert not first[0].is_reduced
    assert first[1].is_reduced


def test_units_are_not_called():
    report = analyze_groups([exploding], [[OPTIONAL], exploding])
    assert report.total_compositions == 2


def test_empty_group_flagged():
    with pytest.warns(UserWarning):
        report = analyze_groups([tracer("a")], [[OPTIONAL]])
    assert report.empty_groups == [1]
    assert report.total_compositions == 0
    assert any("Empty groups" in w for w in report.warnings)


def test_large_expansion_flagged(monkeypatch):
    monkeypatch.setattr(analyzer, "LARGE_EXPANSION_THRESHOLD", 10)
    report = analyze_groups(*build_plain_groups())
    assert any("Large expansion: 24" in w for w in report.warnings)


def test_warnings_not_duplicated():
    report = analyze_groups([tracer("a")])
    report.add_warning("x")
    report.add_warning("x")
    assert report.warnings == ["x"]
