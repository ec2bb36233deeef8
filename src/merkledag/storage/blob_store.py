"""Blob store interface and an in-memory implementation.

A blob store maps raw digests to opaque bytes. Keys are produced by the
caller (the DAG builder); the store never hashes values itself, since the
key of a tree object is derived from its children rather than from its
encoded bytes.
"""

import logging
from typing import Dict, Protocol

from merkledag.errors import BlobNotFoundError, StoreWriteError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Key/value store keyed by digest.

    Implementations must accept a repeated put of an identical key/value
    pair as a successful no-op.
    """

    def put(self, key: bytes, value: bytes) -> None:
        ...

    def get(self, key: bytes) -> bytes:
        ...


class MemoryBlobStore:
    """Dict-backed blob store.

    Attributes:
        put_count: Number of put calls received, including duplicates
    """

    def __init__(self) -> None:
        self._blobs: Dict[bytes, bytes] = {}
        self.put_count = 0

    def put(self, key: bytes, value: bytes) -> None:
        """Store value under key.

        Raises:
            StoreWriteError: If key or value is not bytes
        """
        if not isinstance(key, (bytes, bytearray)) or not key:
            raise StoreWriteError(f"Invalid key for put: {key!r}")
        if not isinstance(value, (bytes, bytearray)):
            raise StoreWriteError(
                f"Value for {bytes(key).hex()} must be bytes, got {type(value).__name__}"
            )

        self.put_count += 1
        key = bytes(key)
        if key in self._blobs:
            # Content addressed: first write wins
            return
        self._blobs[key] = bytes(value)
        logger.debug("stored %s (%d bytes)", key.hex()[:12], len(value))

    def get(self, key: bytes) -> bytes:
        """Return the bytes stored under key.

        Raises:
            BlobNotFoundError: If key is absent
        """
        try:
            return self._blobs[bytes(key)]
        except KeyError:
            raise BlobNotFoundError(f"Blob not found: {bytes(key).hex()}") from None

    def exists(self, key: bytes) -> bool:
        return bytes(key) in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray)) and bytes(key) in self._blobs
