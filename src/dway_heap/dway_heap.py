"""
D-way heap (aka d-ary heap) with an index of element positions.

A d-way heap generalizes the binary heap: every inner node has up to `D`
children instead of 2. Compared to a binary heap, the tree is shallower, so
insertions and priority decreases get cheaper while extractions scan more
children per level. A 4-way heap is usually the sweet spot for the priority
queues in Dijkstra and Prim algorithms, which repeatedly change the priority
of elements already queued.

To make those updates O(log n), the heap keeps track of the slots where each
element is stored (see `PositionIndex`), so that no linear search is needed.
"""
import copy
import logging
from collections.abc import Callable, Hashable, Sequence
from numbers import Integral
from typing import Any, Optional

import numpy as np

from src.dway_heap.compare import (
    Comparator,
    default_compare,
    reverse_compare,
    validate_compare,
    validate_element,
)
from src.dway_heap.exceptions import (
    ConstructionArgumentError,
    ElementArgumentError,
    ElementNotFoundError,
    EmptyHeapError,
    HeapInvariantViolation,
)
from src.dway_heap.positions import PositionIndex

logger = logging.getLogger(__name__)

DEFAULT_BRANCHING_FACTOR = 2


def _as_sequence(elements: Any) -> Sequence:
    if isinstance(elements, np.ndarray):
        if elements.ndim != 1:
            raise ConstructionArgumentError(
                "Illegal argument for DWayHeap constructor: elements must be "
                f"one-dimensional, got shape {elements.shape}"
            )
        return elements.tolist()
    if isinstance(elements, (str, bytes)) or not isinstance(elements, Sequence):
        raise ConstructionArgumentError(
            f"Illegal argument for DWayHeap constructor: elements {elements!r}"
        )
    return elements


class DWayHeap:
    """
    A min-heap with a configurable branching factor.

    Elements are ordered by `compare`: the smaller an element, the higher its
    priority, and the closer it sits to the root.

    Elements are located by their position key. By default, hashable values
    are keyed by value and unhashable ones (lists, dicts, ...) by reference,
    so to update an unhashable element the very same object must be passed.
    Pass `key` to choose how elements are identified instead.

    Parameters
    ----------
    branching_factor : int
        Number of children per node, at least 2. By default 2.
    elements : Sequence
        Initial elements, by default empty. A one-dimensional numpy array is
        accepted too.
    compare : Callable[[Any, Any], int], optional
        Two-argument comparator returning a negative, zero or positive
        number. By default, ascending order of the elements.
    key : Callable[[Any], Hashable], optional
        Maps an element to a hashable identity for the position index.
    copy_on_peek : bool
        If True (default) `peek` returns a deep copy of the top element, so
        that callers cannot corrupt the heap through it. Set to False for
        elements that cannot be copied.

    Raises
    ------
    ConstructionArgumentError
        If any of the arguments is not valid.
    """

    def __init__(
        self,
        branching_factor: int = DEFAULT_BRANCHING_FACTOR,
        elements: Sequence = (),
        compare: Optional[Comparator] = None,
        key: Optional[Callable[[Any], Hashable]] = None,
        copy_on_peek: bool = True
    ):
        if (
            not isinstance(branching_factor, Integral)
            or isinstance(branching_factor, bool)
            or branching_factor < 2
        ):
            raise ConstructionArgumentError(
                "Illegal argument for DWayHeap constructor: "
                f"branching_factor {branching_factor!r}"
            )
        elements = _as_sequence(elements)
        for element in elements:
            if not validate_element(element):
                raise ConstructionArgumentError(
                    "Illegal argument for DWayHeap constructor: "
                    f"element {element!r}"
                )
        if key is not None and not callable(key):
            raise ConstructionArgumentError(
                f"Illegal argument for DWayHeap constructor: key {key!r}"
            )

        self._branching_factor = int(branching_factor)
        self._compare = (
            default_compare if compare is None else validate_compare(compare)
        )
        self._positions = PositionIndex(key)
        self._copy_on_peek = copy_on_peek

        self._heapify(elements)

    @classmethod
    def min_heap(
        cls,
        elements: Sequence = (),
        branching_factor: int = DEFAULT_BRANCHING_FACTOR,
        key: Optional[Callable[[Any], Hashable]] = None,
        copy_on_peek: bool = True
    ) -> "DWayHeap":
        """Heap extracting elements in ascending order."""
        return cls(branching_factor, elements, None, key, copy_on_peek)

    @classmethod
    def max_heap(
        cls,
        elements: Sequence = (),
        branching_factor: int = DEFAULT_BRANCHING_FACTOR,
        key: Optional[Callable[[Any], Hashable]] = None,
        copy_on_peek: bool = True
    ) -> "DWayHeap":
        """Heap extracting elements in descending order."""
        return cls(
            branching_factor,
            elements,
            reverse_compare(default_compare),
            key,
            copy_on_peek
        )

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, elem: Any) -> bool:
        return self.contains(elem)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(branching_factor="
            f"{self._branching_factor}, size={self.size})"
        )

    @property
    def size(self) -> int:
        return len(self._positions)

    @property
    def branching_factor(self) -> int:
        return self._branching_factor

    branch_factor = branching_factor

    @property
    def compare(self) -> Comparator:
        return self._compare

    def is_empty(self) -> bool:
        return self.size == 0

    def first_leaf_index(self) -> int:
        """Index of the first leaf in the heap array (0 when empty)."""
        return (self.size - 2) // self._branching_factor + 1

    def contains(self, elem: Any) -> bool:
        return elem in self._positions

    def peek(self) -> Any:
        """
        Return the top element without removing it.

        Returns
        -------
        Any
            A deep copy of the element with the highest priority, or the
            element itself if the heap was built with `copy_on_peek=False`.

        Raises
        ------
        EmptyHeapError
            If the heap is empty.
        """
        if self.is_empty():
            raise EmptyHeapError("Invalid status: empty heap")
        root = self._positions[0]
        return copy.deepcopy(root) if self._copy_on_peek else root

    def push(self, elem: Any) -> "DWayHeap":
        """
        Add an element to the heap.

        Returns
        -------
        DWayHeap
            The heap itself, so that calls can be chained.

        Raises
        ------
        ElementArgumentError
            If `elem` is None or callable.
        """
        if not validate_element(elem):
            raise ElementArgumentError(f"Illegal argument for push: {elem!r}")

        n = self.size
        self._positions.record(elem, n)
        self._bubble_up(n)
        return self

    def top(self) -> Any:
        """
        Remove and return the element with the highest priority.

        Raises
        ------
        EmptyHeapError
            If the heap is empty.
        """
        n = self.size
        if n == 0:
            raise EmptyHeapError("Invalid status: empty heap")
        if n == 1:
            return self._positions.release(0, truncate=True)

        top_elem = self._positions.release(0)
        last = self._positions.release(n - 1, truncate=True)
        self._positions.record(last, 0)
        self._push_down(0)
        return top_elem

    def update_priority(self, old_value: Any, new_value: Any) -> "DWayHeap":
        """
        Replace `old_value` with `new_value` and restore the heap.

        Every replaced slot with a higher priority than before (the new value
        is smaller than the entry it replaces) moves towards the root, every
        slot with a lower priority towards the leaves.

        Note that *all* the occurrences of `old_value` are replaced with the
        same `new_value` instance.

        Parameters
        ----------
        old_value : Any
            The element to update. Must be stored in the heap.
        new_value : Any
            Its replacement.

        Returns
        -------
        DWayHeap
            The heap itself, so that calls can be chained.

        Raises
        ------
        ElementNotFoundError
            If `old_value` is not stored in the heap.
        ElementArgumentError
            If `new_value` is None or callable.
        """
        indices = self._positions.lookup(old_value)
        if not indices:
            raise ElementNotFoundError(
                f"Out of range argument: element {old_value!r} "
                "not stored in the heap"
            )
        if not validate_element(new_value):
            raise ElementArgumentError(
                f"Illegal argument for update_priority: {new_value!r}"
            )

        # entries sharing a key may differ in priority, so the direction
        # is decided per slot
        raised = []
        lowered = []
        for index in indices:
            order = self._compare(new_value, self._positions.release(index))
            self._positions.record(new_value, index)
            if order < 0:
                raised.append(index)
            elif order > 0:
                lowered.append(index)

        logger.debug(
            "Updating %d occurrence(s) of %r to %r (%d up, %d down)",
            len(indices), old_value, new_value, len(raised), len(lowered)
        )
        for index in sorted(raised):
            if self._holds(index, new_value):
                self._bubble_up(index)
        for index in sorted(lowered, reverse=True):
            if self._holds(index, new_value):
                self._push_down(index)
        return self

    def sorted(self) -> list[Any]:
        """
        Drain the heap, returning its elements in ascending order.

        WARNING: all the elements are removed from the heap.
        """
        result = []
        while not self.is_empty():
            result.append(self.top())
        return result

    def check_invariant(self) -> bool:
        """
        Verify the heap property and the position index, for testing.

        Returns
        -------
        bool
            True if both hold.

        Raises
        ------
        HeapInvariantViolation
            On the first violation found.
        """
        n = self.size
        d = self._branching_factor
        for parent_index in range(n):
            parent = self._positions[parent_index]
            first_child = parent_index * d + 1
            for child_index in range(first_child, min(n, first_child + d)):
                if self._compare(self._positions[child_index], parent) < 0:
                    raise HeapInvariantViolation(
                        f"Heap properties violated: element at {child_index} "
                        f"is smaller than its parent at {parent_index}"
                    )

        if not self._positions.is_consistent():
            raise HeapInvariantViolation(
                "Position index out of sync with the heap array"
            )
        return True

    def _holds(self, index: int, elem: Any) -> bool:
        positions = self._positions
        return positions.key_of(positions[index]) == positions.key_of(elem)

    def _parent(self, index: int) -> int:
        return (index - 1) // self._branching_factor

    def _bubble_up(self, index: int) -> int:
        positions = self._positions
        current = positions[index]
        i = index

        while i > 0:
            parent_index = self._parent(i)
            parent = positions[parent_index]
            if self._compare(current, parent) < 0:
                positions.record(parent, i, parent_index)
                i = parent_index
            else:
                break

        if i != index:
            positions.record(current, i, index)
        return i

    def _push_down(self, index: int) -> int:
        positions = self._positions
        d = self._branching_factor
        n = len(positions)
        current = positions[index]
        parent_index = index
        child_index = index * d + 1

        while child_index < n:
            smallest_index = child_index
            smallest = positions[child_index]
            for i in range(child_index + 1, min(n, child_index + d)):
                if self._compare(positions[i], smallest) < 0:
                    smallest_index = i
                    smallest = positions[i]

            if self._compare(smallest, current) < 0:
                positions.record(smallest, parent_index, smallest_index)
                parent_index = smallest_index
                child_index = parent_index * d + 1
            else:
                break

        if parent_index != index:
            positions.record(current, parent_index, index)
        return parent_index

    def _heapify(self, elements: Sequence) -> None:
        n = len(elements)
        for i, element in enumerate(elements):
            self._positions.record(element, i)

        for i in range((n - 1) // self._branching_factor, -1, -1):
            self._push_down(i)

        logger.debug(
            "Heapified %d element(s) with branching factor %d",
            n, self._branching_factor
        )
