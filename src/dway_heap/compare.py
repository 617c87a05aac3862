import inspect
from collections.abc import Callable, Hashable
from typing import Any

from src.dway_heap.exceptions import ConstructionArgumentError

Comparator = Callable[[Any, Any], int]


def default_compare(x: Any, y: Any) -> int:
    """Ascending order: -1 if x < y, 1 if x > y, 0 otherwise."""
    if x < y:
        return -1
    if x > y:
        return 1
    return 0


def reverse_compare(compare: Comparator) -> Comparator:
    """
    Wrap a comparator so that the resulting order is reversed.

    A min-heap driven by the reversed comparator behaves as a max-heap for
    the wrapped one.

    Parameters
    ----------
    compare : Comparator
        The comparator to reverse.

    Returns
    -------
    Comparator
        A two-argument comparator with swapped operands.
    """
    def reversed_compare(x: Any, y: Any) -> int:
        return compare(y, x)

    return reversed_compare


def validate_compare(compare: Any) -> Comparator:
    """
    Check that `compare` can be used as a heap comparator.

    Parameters
    ----------
    compare : Any
        Candidate comparator.

    Returns
    -------
    Comparator
        The comparator itself, unchanged.

    Raises
    ------
    ConstructionArgumentError
        If `compare` is not callable, or it does not take exactly two
        positional arguments without defaults. Further parameters with
        defaults, e.g. `def cmp(a, b, reverse=False)`, are allowed.
    """
    if not callable(compare):
        raise ConstructionArgumentError(
            f"Illegal argument for DWayHeap constructor: compare {compare!r}"
        )
    try:
        signature = inspect.signature(compare)
    except (TypeError, ValueError):
        # builtins implemented in C may not expose a signature
        return compare

    # arity counts the positional parameters before the first default
    arity = 0
    for parameter in signature.parameters.values():
        if (
            parameter.kind not in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
            )
            or parameter.default is not inspect.Parameter.empty
        ):
            break
        arity += 1

    try:
        signature.bind(None, None)
    except TypeError:
        arity = -1
    if arity != 2:
        raise ConstructionArgumentError(
            "Illegal argument for DWayHeap constructor: compare "
            f"{compare!r} must accept exactly two arguments"
        )
    return compare


def validate_element(value: Any) -> bool:
    """True iff `value` can be stored in the heap."""
    return value is not None and not callable(value)


class IdentityKey:
    """Position key for unhashable values, compared by object identity."""
    __slots__ = ("_id",)

    def __init__(self, value: Any):
        self._id = id(value)

    def __eq__(self, other):
        if not isinstance(other, IdentityKey):
            return NotImplemented
        return self._id == other._id

    def __hash__(self):
        return hash(self._id)

    def __repr__(self):
        return f"IdentityKey(0x{self._id:x})"


def default_key(value: Any) -> Hashable:
    """
    Map an element to the key used by the position index.

    Hashable values are their own key (value identity); anything else,
    e.g. lists and dicts, is keyed by reference identity.
    """
    try:
        hash(value)
    except TypeError:
        return IdentityKey(value)
    return value
