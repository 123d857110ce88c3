"""
Serialization helpers for composition reports.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Units are never serialized: a plan only holds (group_index, position) keys.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from cartesian_composition.analyzer import CompositionReport, PlanEntry


def plan_entry_to_dict(e: PlanEntry) -> Dict[str, Any]:
    return {
        "keys": [[g, p] for g, p in e.keys],
        "omitted": list(e.omitted),
    }


def plan_entry_from_dict(d: Dict[str, Any]) -> PlanEntry:
    if not isinstance(d, dict):
        raise TypeError(f"Unsupported plan entry type: {type(d)}")
    return PlanEntry(
        keys=tuple((int(g), int(p)) for g, p in d["keys"]),
        omitted=tuple(int(i) for i in d.get("omitted", [])),
    )


def report_to_dict(r: CompositionReport) -> Dict[str, Any]:
    return {
        "total_groups": r.total_groups,
        "nodes_per_group": list(r.nodes_per_group),
        "optional_groups": list(r.optional_groups),
        # Keys as strings so JSON and YAML agree
        "optional_positions": {str(k): list(v) for k, v in r.optional_positions.items()},
        "empty_groups": list(r.empty_groups),
        "full_compositions": r.full_compositions,
        "reduced_compositions": r.reduced_compositions,
        "skipped_duplicates": r.skipped_duplicates,
        "plan": [plan_entry_to_dict(e) for e in r.plan],
        "warnings": list(r.warnings),
    }


def report_from_dict(d: Dict[str, Any]) -> CompositionReport:
    r = CompositionReport(total_groups=d.get("total_groups", 0))
    r.nodes_per_group = list(d.get("nodes_per_group", []))
    r.optional_groups = list(d.get("optional_groups", []))
    r.optional_positions = {int(k): list(v) for k, v in d.get("optional_positions", {}).items()}
    r.empty_groups = list(d.get("empty_groups", []))
    r.full_compositions = d.get("full_compositions", 0)
    r.reduced_compositions = d.get("reduced_compositions", 0)
    r.skipped_duplicates = d.get("skipped_duplicates", 0)
    r.plan = [plan_entry_from_dict(e) for e in d.get("plan", [])]
    r.warnings = list(d.get("warnings", []))
    return r


def report_to_json(r: CompositionReport) -> str:
    return json.dumps(report_to_dict(r), sort_keys=True)


def report_from_json(s: str) -> CompositionReport:
    d = json.loads(s)
    return report_from_dict(d)


def report_to_yaml(r: CompositionReport) -> str:
    return yaml.safe_dump(report_to_dict(r))


def report_from_yaml(s: str) -> CompositionReport:
    d = yaml.safe_load(s)
    return report_from_dict(d)
