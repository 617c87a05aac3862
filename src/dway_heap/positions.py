from collections.abc import Callable, Hashable
from typing import Any, Optional

from src.dway_heap.compare import default_key


class PositionIndex:
    """
    Heap storage together with the index of where each element lives.

    The storage is a dense list in heap order. Next to it, a dict maps the
    key of every stored element to the list of indices at which that element
    currently appears; several entries under one key are duplicates.

    Bookkeeping is only ever updated through `record` and `release`, so that
    both structures change in the same step.

    Parameters
    ----------
    key : Callable[[Any], Hashable], optional
        Maps an element to its position key, by default `default_key`.
    """
    __slots__ = ("_elements", "_positions", "_key")

    def __init__(self, key: Optional[Callable[[Any], Hashable]] = None):
        self._elements: list[Any] = []
        self._positions: dict[Hashable, list[int]] = {}
        self._key = default_key if key is None else key

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> Any:
        return self._elements[index]

    def __contains__(self, element: Any) -> bool:
        return bool(self._positions.get(self._key(element)))

    @property
    def elements(self) -> tuple:
        """Snapshot of the storage, in heap order."""
        return tuple(self._elements)

    def key_of(self, element: Any) -> Hashable:
        return self._key(element)

    def record(
        self,
        element: Any,
        index: int,
        previous: Optional[int] = None
    ) -> None:
        """
        Store `element` at `index` and remember that it lives there.

        Parameters
        ----------
        element : Any
            The element to store.
        index : int
            Target slot. Must be an existing slot or `len(self)` (append).
        previous : int, optional
            The slot the element is moving from. If recorded for this
            element, that entry is replaced; otherwise `index` is appended.
        """
        n = len(self._elements)
        if index == n:
            self._elements.append(element)
        elif 0 <= index < n:
            self._elements[index] = element
        else:
            raise IndexError(f"position {index} out of range for size {n}")

        indices = self._positions.setdefault(self._key(element), [])
        if previous is not None and previous in indices:
            indices[indices.index(previous)] = index
        else:
            indices.append(index)

    def release(self, index: int, truncate: bool = False) -> Any:
        """
        Forget one occurrence of the element stored at `index`.

        Parameters
        ----------
        index : int
            The slot to release.
        truncate : bool
            If True, the slot is also deleted from the storage, by default
            False. Only the last slot should be truncated.

        Returns
        -------
        Any
            The element that was stored at `index`.
        """
        element = self._elements[index]
        key = self._key(element)
        indices = self._positions.get(key)
        if indices is not None and index in indices:
            indices.remove(index)
            if not indices:
                del self._positions[key]

        if truncate:
            del self._elements[index]
        return element

    def lookup(self, element: Any) -> list[int]:
        """
        All the slots holding `element`, in the order they were recorded.

        An absent element yields an empty list.
        """
        return list(self._positions.get(self._key(element), ()))

    def is_consistent(self) -> bool:
        """Check that storage and index describe each other exactly."""
        recorded = 0
        for key, indices in self._positions.items():
            if not indices:
                return False
            for index in indices:
                if index >= len(self._elements):
                    return False
                if self._key(self._elements[index]) != key:
                    return False
            if len(set(indices)) != len(indices):
                return False
            recorded += len(indices)
        return recorded == len(self._elements)
