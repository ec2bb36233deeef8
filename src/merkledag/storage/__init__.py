"""Storage layer for merkledag.

This module provides the blob store interface the DAG builder writes to,
plus an in-memory and a sharded on-disk implementation.
"""

from merkledag.storage.blob_store import BlobStore, MemoryBlobStore
from merkledag.storage.object_store import FileBlobStore

__all__ = [
    "BlobStore",
    "MemoryBlobStore",
    "FileBlobStore",
]
