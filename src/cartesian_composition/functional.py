""" Small functional helpers used by the parser, the composer and the engine. """

import itertools
import numbers
from typing import Any, Callable, Iterable, Iterator, Tuple


def is_array(value: Any) -> bool:
    """ Lists and tuples are arrays. Strings and other iterables are units. """
    return isinstance(value, (list, tuple))


def is_number_coercible(value: Any) -> bool:
    """ True for numbers (bools included) and for strings float() accepts. """
    if isinstance(value, numbers.Number):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def are_all_coercible_to_number(values: Iterable[Any]) -> bool:
    """ Vacuously true for an empty array, so [] is an empty options marker. """
    return all(is_number_coercible(v) for v in values)


def identity(*args, **kwargs) -> Any:
    """ Composition of zero callables.
        No positional argument gives (), one gives that value, several give the tuple.
        Keyword arguments are dropped. """
    if not args:
        return ()
    if len(args) == 1:
        return args[0]
    return args


def compose(*funcs) -> Callable:
    """ Compose callables right to left, so that compose(f, g, h)(*args) evaluates to f(g(h(*args))).
        The last callable receives the original arguments, every other one the previous result. """
    # Degenerate case: composition of 0 functions = identity over the call arguments.
    if not funcs:
        return identity
    *f_rest, f_last = funcs
    def composed(*args, **kwargs):
        result = f_last(*args, **kwargs)
        for f in reversed(f_rest):
            result = f(result)
        return result
    return composed


def yield_unique_increasing_subsets(items: Iterable[Any], include_empty: bool = False) -> Iterator[Tuple[Any, ...]]:
    """ Yield every subset of the unique items, smallest first.
        Within a size, subsets come in lexicographic order of the items' first occurrence.
        Call again to restart. """
    unique = tuple(dict.fromkeys(items))
    start = 0 if include_empty else 1
    for size in range(start, len(unique) + 1):
        yield from itertools.combinations(unique, size)
