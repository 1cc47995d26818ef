"""Exception types raised by the chunking, indexing and retrieval components."""


class ChunkingConfigError(ValueError):
    """Raised when chunk parameters cannot produce a forward-moving window.

    Attributes:
        chunk_size: The resolved chunk size
        chunk_overlap: The resolved chunk overlap
    """

    def __init__(self, chunk_size: int, chunk_overlap: int):
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        super().__init__(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
        )


class IndexCapacityError(RuntimeError):
    """Raised when an append would grow the index past its configured capacity.

    Attributes:
        capacity: Maximum number of chunks the index may hold
        current: Number of chunks held when the append was attempted
        requested: Number of chunks the append tried to add
    """

    def __init__(self, capacity: int, current: int, requested: int):
        self.capacity = capacity
        self.current = current
        self.requested = requested
        super().__init__(
            f"Index capacity of {capacity} chunks exceeded: "
            f"holding {current}, tried to add {requested}"
        )


class OperationCancelledError(RuntimeError):
    """Raised when a caller-supplied cancellation event is set mid-operation."""
