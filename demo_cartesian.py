#!/usr/bin/env python3
"""
Demo: Cartesian composition of tracer functions.

Prints every composition of the example groups applied to (1, 2, 3),
then the dry-run report as YAML.
"""

import logging

from cartesian_composition import compose_cartesian
from cartesian_composition.analyzer import analyze_groups
from cartesian_composition.examples import build_example_groups
from cartesian_composition.serialization import report_to_yaml


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    groups = build_example_groups()

    print("=" * 70)
    print("CARTESIAN COMPOSITION DEMO")
    print("=" * 70)

    results = compose_cartesian(*groups)(1, 2, 3)
    for i, res in enumerate(results, 1):
        print(f"  {i:3d}. {res}")

    print()
    print("-" * 70)
    print("DRY-RUN REPORT")
    print("-" * 70)
    report = analyze_groups(*groups)
    print(report_to_yaml(report))


if __name__ == "__main__":
    main()
