"""
Input Parser for Cartesian Composition (Raw Groups → Nodes + Option Flags).

Group shape:
    [marker?, declaration, declaration, ...]

Declaration shapes:
    - fn                         a single unit
    - [fn, fn, ...]              a chain composed as one node
    - [marker, fn, ...]          a chain with its own options marker
    - marker                     only as first element: list of numeric codes

Syntax Notes:
    - A marker is an array whose every element is number-coercible
    - A marker anywhere but first is treated as a chain (and fails on use)
    - Positions count the marker slot
"""

import logging
import warnings
from typing import Any, List, Optional, Sequence, Tuple, Union

from cartesian_composition.declarations import Chain, Declaration, Option, OptionsMarker, Unit
from cartesian_composition.functional import are_all_coercible_to_number, is_array
from cartesian_composition.model import GroupOptions, Node, ParsedGroup


logger = logging.getLogger(__name__)


def _normalize_code(value: Any) -> Union[int, float]:
    """Numeric strings become numbers, integral floats become ints."""
    if isinstance(value, str):
        value = float(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _is_marker(value: Any) -> bool:
    return is_array(value) and are_all_coercible_to_number(value)


def parse_marker(value: Sequence[Any]) -> OptionsMarker:
    """Build an OptionsMarker from a raw array of option codes."""
    return OptionsMarker(codes=frozenset(_normalize_code(v) for v in value))


def parse_chain(values: Sequence[Any]) -> Chain:
    """
    Split a raw chain into its leading marker (if any) and its units.

    Example:
        [[1], i]   →  Chain(units=(i,), marker=OptionsMarker({1}))
        [a, z]     →  Chain(units=(a, z))
    """
    marker: Optional[OptionsMarker] = None
    units: List[Any] = []
    for j, value in enumerate(values):
        if j == 0 and _is_marker(value):
            marker = parse_marker(value)
        else:
            units.append(value)
    return Chain(units=tuple(units), marker=marker)


def classify_declaration(value: Any, position: int) -> Declaration:
    """
    Turn one raw group element into its tagged form.

    Args:
        value: Raw element of a group
        position: Its index in the group

    Returns:
        OptionsMarker, Chain or Unit
    """
    if position == 0 and _is_marker(value):
        return parse_marker(value)
    if is_array(value):
        return parse_chain(value)
    return Unit(fn=value)


def parse_group(
    group_index: int,
    declarations: Sequence[Any],
    options: Optional[GroupOptions] = None,
) -> ParsedGroup:
    """
    Parse one group into nodes and option flags.

    Declarations are scanned from the highest position down, so the returned
    nodes pushed in order onto a stack pop out in ascending position.

    Parsing is idempotent: passing the same ``options`` again records nothing
    new and yields equal nodes.

    Args:
        group_index: Index of the group among all groups
        declarations: Raw group (list or tuple)
        options: Option flags to merge into; a fresh one is created if None

    Returns:
        ParsedGroup

    Raises:
        TypeError: If the group is not a list or tuple
    """
    if not is_array(declarations):
        raise TypeError(
            f"Group {group_index} must be a list or tuple, got {type(declarations).__name__}"
        )

    if options is None:
        options = GroupOptions(group_index=group_index)

    nodes: List[Node] = []
    for position in range(len(declarations) - 1, -1, -1):
        declaration = classify_declaration(declarations[position], position)

        if isinstance(declaration, OptionsMarker):
            options.record_group(declaration.codes)
            continue

        if isinstance(declaration, Chain):
            if declaration.marker is not None:
                options.record_node(position, declaration.marker.codes)
            units: Tuple[Any, ...] = declaration.units
        else:
            units = (declaration.fn,)

        nodes.append(Node(group_index=group_index, position=position, units=units))

    parsed = ParsedGroup(index=group_index, nodes=nodes, options=options)

    if parsed.is_empty:
        warnings.warn(
            f"Group {group_index} has no composable declarations; the product is empty",
            UserWarning,
        )

    logger.debug(
        "Parsed group %d: %d node(s), optional group=%s, optional positions=%s",
        group_index,
        len(nodes),
        options.has_option(Option.OPTIONAL),
        options.optional_positions,
    )
    return parsed
