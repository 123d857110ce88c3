"""
Example groups for demos and tests.

Units are "tracers": each renders its own name around its arguments, so the
result of a composition spells out the composition itself, e.g. a(d(h(1, 2, 3))).
"""
from typing import Any, Callable, Dict, List

from cartesian_composition.engine import OPTIONAL


def tracer(name: str) -> Callable[..., str]:
    def unit(*args: Any) -> str:
        return f"{name}({', '.join(str(a) for a in args)})"

    unit.__name__ = name
    return unit


def build_tracers(names: str = "abcdefghi") -> Dict[str, Callable[..., str]]:
    return {n: tracer(n) for n in names}


def build_plain_groups() -> List[List[Any]]:
    """[a, b, c] x [d, e, f, g] x [h, i], no optional declarations."""
    t = build_tracers()
    return [
        [t["a"], t["b"], t["c"]],
        [t["d"], t["e"], t["f"], t["g"]],
        [t["h"], t["i"]],
    ]


def build_example_groups() -> List[List[Any]]:
    """
    Same groups, but the second group is optional and so is ``i``.

    For (1, 2, 3) the first compositions are:
        a(d(h(1, 2, 3))), a(h(1, 2, 3)),
        a(d(i(1, 2, 3))), a(i(1, 2, 3)), a(d(1, 2, 3)), a(1, 2, 3),
        a(e(h(1, 2, 3))), a(e(i(1, 2, 3))), a(e(1, 2, 3)), ...
    """
    t = build_tracers()
    return [
        [t["a"], t["b"], t["c"]],
        [[OPTIONAL], t["d"], t["e"], t["f"], t["g"]],
        [t["h"], [[OPTIONAL], t["i"]]],
    ]
