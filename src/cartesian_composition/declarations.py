"""
Declaration System for Cartesian Composition

Every element of a group passed to ``compose_cartesian`` is one of three
shapes, which the parser turns into a tagged union exactly once:

    - Unit           a single callable
    - Chain          a list of callables composed together as one node
    - OptionsMarker  a leading list of numeric option codes

ARCHITECTURAL RULE:
    Raw input is sniffed only in the parser.
    Everything downstream works on these objects.
"""

from abc import ABC
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, FrozenSet, Optional, Tuple, Union


class Option(IntEnum):
    """
    Option codes accepted inside an Options Marker.

    Codes are plain numbers on the wire, so ``[1]`` and ``[Option.OPTIONAL]``
    are the same marker.
    """

    OPTIONAL = 1


class Declaration(ABC):
    """
    Base class for the three declaration shapes.

    Structure only. Composition belongs in the composer.
    """
    pass


@dataclass(frozen=True)
class OptionsMarker(Declaration):
    """
    Leading array of option codes.

    Example:
        [[OPTIONAL], d, e, f]      marks the whole group optional
        [h, [[OPTIONAL], i]]       marks only the chain at position 1

    Properties:
        codes: Option codes, normalized to numbers. Unknown codes are kept
               but have no effect.
    """

    codes: FrozenSet[Union[int, float]]

    def has(self, code: Union[Option, int, float]) -> bool:
        return code in self.codes


@dataclass(frozen=True)
class Unit(Declaration):
    """
    A single composable value, normally a callable.

    Nothing checks that ``fn`` is callable. A bad unit fails when the
    composition is invoked.
    """

    fn: Any


@dataclass(frozen=True)
class Chain(Declaration):
    """
    An inner list of units composed together as one atomic node.

    Example:
        [a, z]  becomes  Chain(units=(a, z))  and yields a(z(...))

    Properties:
        units: The callables of the chain, in declaration order
        marker: The chain's own leading OptionsMarker, if any
    """

    units: Tuple[Any, ...]
    marker: Optional[OptionsMarker] = None
