"""Exception hierarchy for merkledag.

Every failure raised by the builder, the resolver or a blob store derives
from MerkleDagError. A missing path segment during resolution is not an
error: PathResolver returns None for it.
"""


class MerkleDagError(Exception):
    """Base class for all merkledag errors."""


class StoreWriteError(MerkleDagError):
    """Raised when a blob store rejects a put."""


class StoreReadError(MerkleDagError):
    """Raised when a blob store read fails."""


class BlobNotFoundError(StoreReadError):
    """Raised when a key is not present in the blob store."""


class SerializationError(MerkleDagError):
    """Raised when a tree object cannot be encoded or decoded."""


class UnsupportedNodeError(MerkleDagError):
    """Raised when a tree node reports a type other than FILE or DIRECTORY."""
