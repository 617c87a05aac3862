import heapq
from functools import cmp_to_key
from typing import Any

from src.dway_heap.dway_heap import DWayHeap


def get_topk(heap: DWayHeap, k: int) -> list[Any]:
    """
    Function to get the top-K elements from a heap.

    The K elements with the highest priority, i.e. the smallest according to
    the heap's comparator, are returned in extraction order. A heap built with
    `DWayHeap.max_heap` yields the K largest elements. The heap itself is left
    untouched.

    Parameters
    ----------
    heap : DWayHeap
        A DWayHeap object
    k : int
        The number of 'top-K' elements to retrieve.

    Returns
    -------
    list[Any]
        The 'top-K' elements.
    """
    if k <= 0:
        return []
    if heap.is_empty():
        return []

    return heapq.nsmallest(
        k, heap._positions.elements, key=cmp_to_key(heap.compare)
    )
