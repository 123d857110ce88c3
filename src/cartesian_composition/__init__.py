"""
Cartesian Composition Package

Composes functions across the Cartesian product of N groups, with optional
groups and optional declarations expanded into every distinct reduced
composition.

ARCHITECTURAL GUARANTEE:
------------------------
This package:
    - Never validates units (they fail where they are called)
    - Keeps no state between invocations
    - Returns results in a fixed, documented order

Entry point: compose_cartesian(*groups)(*args) -> list
"""

from .declarations import Option
from .engine import OPTIONAL, compose_cartesian

__version__ = "0.1.0"

__all__ = ["OPTIONAL", "Option", "compose_cartesian"]
