"""merkledag - content-addressed Merkle DAG over files and directories.

Builds a deterministic, deduplicated encoding of a file/directory tree in a
key/value blob store keyed by SHA-256 digests, and resolves stored content
back by name.
"""

__version__ = "0.1.0"
__author__ = "merkledag Contributors"

from merkledag.core import (
    DagBuilder,
    DagObject,
    Directory,
    File,
    Link,
    NodeType,
    PathResolver,
)
from merkledag.errors import (
    BlobNotFoundError,
    MerkleDagError,
    SerializationError,
    StoreReadError,
    StoreWriteError,
    UnsupportedNodeError,
)
from merkledag.storage import FileBlobStore, MemoryBlobStore

__all__ = [
    "__version__",
    "__author__",
    "DagBuilder",
    "PathResolver",
    "DagObject",
    "Link",
    "NodeType",
    "File",
    "Directory",
    "MemoryBlobStore",
    "FileBlobStore",
    "MerkleDagError",
    "BlobNotFoundError",
    "StoreReadError",
    "StoreWriteError",
    "SerializationError",
    "UnsupportedNodeError",
]
