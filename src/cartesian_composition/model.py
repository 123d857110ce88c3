"""
Core Composition Model Objects

Defines the normalized data structures the engine traverses:
    - Nodes (one composable item at a fixed group/position)
    - Group options (optionality flags per group and per position)
    - Parsed groups (nodes plus options for one group)
    - Path identities (deduplication keys for reduced paths)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about raw input shapes
        - Never invoke the units they hold
        - Are scoped to a single engine invocation
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union

from .declarations import Option


PathIdentity = Tuple[int, Tuple[Tuple[int, int], ...]]


@dataclass(frozen=True)
class Node:
    """
    Normalized form of a non-marker declaration.

    Properties:
        group_index:
            0-based index of the group the node belongs to

        position:
            Index of the declaration inside its group, counting the
            marker slot when the group has one

        units:
            One unit for a plain declaration, the chain's units otherwise

    Example:
        Group 1 declared as [[OPTIONAL], d, e] gives
            Node(group_index=1, position=1, units=(d,))
            Node(group_index=1, position=2, units=(e,))
    """

    group_index: int
    position: int
    units: Tuple[Any, ...]

    @property
    def key(self) -> Tuple[int, int]:
        return (self.group_index, self.position)


@dataclass
class GroupOptions:
    """
    Option flags of one group.

    Optionality is additive: a node is optional when the group carries the
    code OR the node's own position does.

    Recording is idempotent. Once a group or position marker has been seen,
    later records for it are ignored.
    """

    group_index: int
    group_codes: Set[Union[int, float]] = field(default_factory=set)
    node_codes: Dict[int, Set[Union[int, float]]] = field(default_factory=dict)
    group_marker_seen: bool = False

    def record_group(self, codes: Iterable[Union[int, float]]) -> bool:
        """Record a group-level marker. Returns False if already recorded."""
        if self.group_marker_seen:
            return False
        self.group_codes.update(codes)
        self.group_marker_seen = True
        return True

    def record_node(self, position: int, codes: Iterable[Union[int, float]]) -> bool:
        """Record a marker for one position. Returns False if already recorded."""
        if position in self.node_codes:
            return False
        self.node_codes[position] = set(codes)
        return True

    def has_option(self, code: Union[Option, int, float], position: Optional[int] = None) -> bool:
        """
        Check an option code.

        Args:
            code: Option code to look up
            position: Node position, or None for the group-level flag

        Returns:
            True if the code was recorded at that granularity
        """
        if position is None:
            return code in self.group_codes
        return code in self.node_codes.get(position, ())

    def is_optional(self, position: int) -> bool:
        return (
            self.has_option(Option.OPTIONAL)
            or self.has_option(Option.OPTIONAL, position)
        )

    @property
    def optional_positions(self) -> List[int]:
        return sorted(
            p for p, codes in self.node_codes.items() if Option.OPTIONAL in codes
        )


@dataclass
class ParsedGroup:
    """
    Result of parsing one group.

    Properties:
        index: Group index
        nodes: Nodes in reverse declaration order (highest position first),
               ready to be pushed onto a LIFO stack
        options: Option flags gathered while parsing
    """

    index: int
    nodes: List[Node] = field(default_factory=list)
    options: Optional[GroupOptions] = None

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def is_optional(self, node: Node) -> bool:
        return self.options is not None and self.options.is_optional(node.position)


def path_identity(path: Iterable[Node]) -> PathIdentity:
    """
    Deduplication key of a (reduced) path.

    The ordered (group_index, position) pairs of the retained nodes, plus
    their count.
    """
    keys = tuple(node.key for node in path)
    return (len(keys), keys)
