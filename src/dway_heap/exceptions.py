class DWayHeapError(Exception):
    """Base class for every error raised by the heap."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class ConstructionArgumentError(DWayHeapError, ValueError):
    pass


class ElementArgumentError(DWayHeapError, TypeError):
    pass


class EmptyHeapError(DWayHeapError, RuntimeError):
    pass


class ElementNotFoundError(DWayHeapError, LookupError):
    pass


class HeapInvariantViolation(DWayHeapError, RuntimeError):
    pass
