"""Fixed-size chunking of oversized file content."""

from typing import Iterator

from merkledag.constants import MAX_BLOB_SIZE


def needs_chunking(data: bytes, size: int = MAX_BLOB_SIZE) -> bool:
    """Content strictly larger than the threshold is chunked."""
    return len(data) > size


def split_chunks(data: bytes, size: int = MAX_BLOB_SIZE) -> Iterator[bytes]:
    """Yield consecutive slices of ``size`` bytes.

    Every chunk is exactly ``size`` bytes except the last, which holds the
    remainder. Empty input yields nothing.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")

    view = memoryview(data)
    for offset in range(0, len(view), size):
        yield bytes(view[offset:offset + size])
