"""
Composer: turns a selection path into one concrete result.

The first unit of the flattened path is applied last (outermost), the last
unit is applied first, directly to the call arguments.

IMPORTANT:
    Units are not checked. A non-callable unit raises Python's own
    TypeError when the composition is invoked.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from cartesian_composition.functional import compose
from cartesian_composition.model import Node


def flatten_units(path: Iterable[Node]) -> List[Any]:
    """Concatenate the units of every node, in path order."""
    units: List[Any] = []
    for node in path:
        units.extend(node.units)
    return units


def compose_path(
    path: Iterable[Node],
    args: Sequence[Any] = (),
    kwargs: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Compose the units of a path and invoke the composition.

    An empty path composes to the identity over ``args``.
    """
    return compose(*flatten_units(path))(*args, **(kwargs or {}))
