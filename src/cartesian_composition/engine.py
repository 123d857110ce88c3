"""
Cartesian Composition Engine.

Given N groups of composable units, enumerates the Cartesian product of the
groups and composes every combination:

    compose_cartesian([a, b, c], [d, e, f, g], [h, i])(1, 2, 3)

    ==  [a(d(h(1, 2, 3))), a(d(i(1, 2, 3))), a(e(h(1, 2, 3))), ...]

A group, or a single declaration of a group, can be marked optional with a
leading options marker. For every combination the engine then also emits the
compositions obtained by leaving out any non-empty subset of its optional
nodes, each distinct reduced path exactly once:

    compose_cartesian(
        [a, b],
        [[compose_cartesian.OPTIONAL], c],
    )("1")

    ==  ["a(c(1))", "a(1)", "b(c(1))", "b(1)"]

Traversal order is the order of nested loops over the groups in declaration
order, each loop ascending by position, with the reduced compositions of a
combination emitted right after it, smallest omission first.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Sequence, Set, Tuple

from cartesian_composition.composer import compose_path
from cartesian_composition.declarations import Option
from cartesian_composition.functional import yield_unique_increasing_subsets
from cartesian_composition.model import Node, ParsedGroup, PathIdentity, path_identity
from cartesian_composition.parser import parse_group


logger = logging.getLogger(__name__)

OPTIONAL = Option.OPTIONAL


@dataclass(frozen=True)
class Selection:
    """
    One path the engine composes.

    Properties:
        path: Nodes to compose, in group order
        omitted: Group indices left out; empty for a full combination
    """

    path: Tuple[Node, ...]
    omitted: Tuple[int, ...] = ()

    @property
    def is_reduced(self) -> bool:
        return bool(self.omitted)

    @property
    def identity(self) -> PathIdentity:
        return path_identity(self.path)


class CartesianTraversal:
    """
    Depth-first walk over the product of the groups, plus optional expansion.

    One instance per invocation: it owns the parsed-group cache, the option
    flags and the ledger of reduced paths already emitted. Iterating it yields
    Selection objects in result order.
    """

    def __init__(self, groups: Sequence[Sequence[Any]]):
        self.groups = tuple(groups)
        self.ledger: Set[PathIdentity] = set()
        self.full_count = 0
        self.reduced_count = 0
        self.skipped_duplicates = 0
        self._parsed: Dict[int, ParsedGroup] = {}

    def group(self, index: int) -> ParsedGroup:
        """Parse a group on first use and cache it."""
        parsed = self._parsed.get(index)
        if parsed is None:
            parsed = parse_group(index, self.groups[index])
            self._parsed[index] = parsed
        return parsed

    def is_optional(self, node: Node) -> bool:
        return self.group(node.group_index).is_optional(node)

    def _push(self, stack: List[Tuple[Node, Tuple[Node, ...]]], index: int, prefix: Tuple[Node, ...]) -> None:
        # Nodes come highest position first, so position 0 is popped first.
        for node in self.group(index).nodes:
            stack.append((node, prefix + (node,)))

    def paths(self) -> Iterator[Tuple[Node, ...]]:
        """
        Yield every complete selection path, in nested-loop order.

        Uses an explicit stack of (node, path) frames, so depth never depends
        on the interpreter's recursion limit.
        """
        count = len(self.groups)
        if not count:
            return
        stack: List[Tuple[Node, Tuple[Node, ...]]] = []
        self._push(stack, 0, ())
        while stack:
            node, path = stack.pop()
            if len(path) == count:
                yield path
            else:
                self._push(stack, node.group_index + 1, path)

    def expand(self, path: Tuple[Node, ...]) -> Iterator[Selection]:
        """
        Yield the full path, then each new reduced path.

        Subsets of optional path indices come by increasing size, in path
        order within a size. A reduced path already in the ledger is skipped.
        """
        self.full_count += 1
        yield Selection(path=path)

        optionals = [i for i, node in enumerate(path) if self.is_optional(node)]
        for subset in yield_unique_increasing_subsets(optionals):
            reduced = tuple(node for i, node in enumerate(path) if i not in subset)
            identity = path_identity(reduced)
            if identity in self.ledger:
                self.skipped_duplicates += 1
                continue
            self.ledger.add(identity)
            self.reduced_count += 1
            yield Selection(
                path=reduced,
                omitted=tuple(path[i].group_index for i in subset),
            )

    def __iter__(self) -> Iterator[Selection]:
        for path in self.paths():
            yield from self.expand(path)


def compose_cartesian(*groups: Sequence[Any]) -> Callable[..., List[Any]]:
    """
    Cartesian composition of functions.

    Args:
        *groups: Each group is a list whose elements are:
            - a callable
            - a list of callables composed together as one node
            - either of the above prefixed by an options marker
              ([OPTIONAL] as first element of the group or of the chain)

    Returns:
        A callable taking the call arguments and returning the list of
        composition results. With no groups it returns [] and calls nothing.

    Example:
        >>> a = lambda x: f"a({x})"
        >>> b = lambda x: f"b({x})"
        >>> compose_cartesian([a], [b])("x")
        ['a(b(x))']
    """

    def run(*args: Any, **kwargs: Any) -> List[Any]:
        if not groups:
            return []

        traversal = CartesianTraversal(groups)
        logger.debug("Composing %d group(s) with %d argument(s)", len(groups), len(args))

        results = [compose_path(selection.path, args, kwargs) for selection in traversal]

        logger.debug(
            "Produced %d result(s): %d full, %d reduced, %d duplicate(s) skipped",
            len(results),
            traversal.full_count,
            traversal.reduced_count,
            traversal.skipped_duplicates,
        )
        return results

    return run


compose_cartesian.OPTIONAL = OPTIONAL
