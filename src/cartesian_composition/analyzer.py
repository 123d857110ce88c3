"""
Composition Analyzer — Dry-run inventory of a cartesian composition.

This module walks the same traversal as ``compose_cartesian`` without
invoking any unit, and reports:
    - Group and node inventory
    - Optional groups and optional node positions
    - Full, reduced and skipped-duplicate counts
    - The ordered composition plan
    - Warning flags for degenerate or very large expansions

IMPORTANT: It does NOT call the units. It only produces read-only reports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from cartesian_composition.declarations import Option
from cartesian_composition.engine import CartesianTraversal


logger = logging.getLogger(__name__)

LARGE_EXPANSION_THRESHOLD = 10_000


@dataclass
class PlanEntry:
    """One planned composition: the (group_index, position) keys it keeps."""
    keys: Tuple[Tuple[int, int], ...]
    omitted: Tuple[int, ...] = ()

    @property
    def is_reduced(self) -> bool:
        return bool(self.omitted)


@dataclass
class CompositionReport:
    """Analysis report for one set of groups."""

    total_groups: int = 0
    nodes_per_group: List[int] = field(default_factory=list)

    # Optionality
    optional_groups: List[int] = field(default_factory=list)
    optional_positions: Dict[int, List[int]] = field(default_factory=dict)
    empty_groups: List[int] = field(default_factory=list)

    # Counts
    full_compositions: int = 0
    reduced_compositions: int = 0
    skipped_duplicates: int = 0

    plan: List[PlanEntry] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    @property
    def total_compositions(self) -> int:
        return self.full_compositions + self.reduced_compositions

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_groups(*groups: Sequence[Any]) -> CompositionReport:
    """
    Analyze the composition ``compose_cartesian(*groups)`` would perform.

    Returns a CompositionReport whose plan lists the compositions in the
    exact order the engine returns their results.
    """
    report = CompositionReport(total_groups=len(groups))
    if not groups:
        return report

    traversal = CartesianTraversal(groups)

    # =========================================================================
    # 1. GROUP INVENTORY
    # =========================================================================

    for index in range(len(groups)):
        parsed = traversal.group(index)
        report.nodes_per_group.append(len(parsed.nodes))
        if parsed.is_empty:
            report.empty_groups.append(index)
        if parsed.options.has_option(Option.OPTIONAL):
            report.optional_groups.append(index)
        positions = parsed.options.optional_positions
        if positions:
            report.optional_positions[index] = positions

    # =========================================================================
    # 2. PLAN
    # =========================================================================

    for selection in traversal:
        report.plan.append(
            PlanEntry(keys=selection.identity[1], omitted=selection.omitted)
        )

    report.full_compositions = traversal.full_count
    report.reduced_compositions = traversal.reduced_count
    report.skipped_duplicates = traversal.skipped_duplicates

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.empty_groups:
        report.add_warning(
            f"Empty groups: {', '.join(str(i) for i in report.empty_groups)} (no compositions produced)"
        )

    if report.total_compositions > LARGE_EXPANSION_THRESHOLD:
        report.add_warning(
            f"Large expansion: {report.total_compositions} compositions"
        )

    logger.debug(
        "Analyzed %d group(s): %d composition(s), %d warning(s)",
        report.total_groups,
        report.total_compositions,
        len(report.warnings),
    )
    return report
