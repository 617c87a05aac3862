import logging

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

logging.getLogger(__name__).addHandler(logging.NullHandler())
