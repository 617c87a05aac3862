from src.dway_heap.compare import default_compare, reverse_compare
from src.dway_heap.dway_heap import DWayHeap
from src.dway_heap.exceptions import (
    ConstructionArgumentError,
    DWayHeapError,
    ElementArgumentError,
    ElementNotFoundError,
    EmptyHeapError,
    HeapInvariantViolation,
)
from src.dway_heap.topk import get_topk
