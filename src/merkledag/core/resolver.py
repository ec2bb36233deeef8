"""Name-based lookup of stored content under a tree digest.

An empty file and an empty directory share one key (the digest of no input),
and the store keeps whichever was written first. Reads under that key are
answered from the link instead: a zero-size link is the empty file, any
other link to it is the empty tree.
"""

import hashlib
import logging
from typing import Optional, Tuple

from merkledag.core.hashing import HashFactory, empty_digest
from merkledag.core.objects import DagObject, Link, decode_object, encode_object
from merkledag.errors import SerializationError
from merkledag.storage.blob_store import BlobStore

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolve child content from tree objects in a blob store.

    Lookup trusts the link names stored in the tree; it never hashes the
    requested path.

    Attributes:
        store: Blob store holding the DAG
        empty: Digest of no input under the hash function the DAG was built with
    """

    def __init__(self, store: BlobStore, hash_factory: HashFactory = hashlib.sha256) -> None:
        self.store = store
        self.empty = empty_digest(hash_factory)

    def read_tree(self, digest: bytes) -> DagObject:
        """Fetch and decode the tree object stored under digest.

        Raises:
            BlobNotFoundError: If digest is not in the store
            SerializationError: If the stored bytes are not a tree envelope
        """
        raw = self.store.get(digest)
        if digest == self.empty:
            # Either the empty tree or an empty file stored first
            return DagObject()
        try:
            return decode_object(raw)
        except SerializationError as e:
            raise SerializationError(f"Failed to decode tree {digest.hex()}: {e}") from e

    def links(self, digest: bytes) -> Tuple[Link, ...]:
        """Return the links of the tree stored under digest, in stored order."""
        return self.read_tree(digest).links

    def resolve(self, root_digest: bytes, name: str) -> Optional[bytes]:
        """Return the bytes stored for child ``name`` of a tree.

        Matching is exact and case-sensitive on a single segment; separators
        in ``name`` are not interpreted. The child's stored bytes are
        returned as-is, whether it is a blob or a tree envelope. Links to the
        empty digest are answered from the link size.

        Args:
            root_digest: Digest of a tree object
            name: Link name to look up

        Returns:
            Stored bytes of the first matching link, or None if no link
            carries that name

        Raises:
            BlobNotFoundError: If root_digest or the linked digest is missing
            SerializationError: If root_digest does not hold a tree envelope
        """
        link = self.read_tree(root_digest).find_link(name)
        if link is None:
            logger.info("no link named %r under %s", name, root_digest.hex()[:12])
            return None
        if link.hash == self.empty:
            return b"" if link.size == 0 else encode_object(DagObject())
        return self.store.get(link.hash)

    def resolve_path(self, root_digest: bytes, path: str) -> Optional[bytes]:
        """Resolve a ``/``-separated path one segment at a time.

        Empty segments are skipped, so leading, trailing and doubled slashes
        are harmless. A path with no segments returns the root's own stored
        bytes.

        Raises:
            SerializationError: If an intermediate segment is not a tree
        """
        segments = [segment for segment in path.split("/") if segment]
        if not segments:
            return self.store.get(root_digest)

        digest = root_digest
        for segment in segments[:-1]:
            link = self.read_tree(digest).find_link(segment)
            if link is None:
                logger.info("no link named %r under %s", segment, digest.hex()[:12])
                return None
            digest = link.hash
        return self.resolve(digest, segments[-1])


def resolve(
    store: BlobStore,
    root_digest: bytes,
    name: str,
    hash_factory: HashFactory = hashlib.sha256,
) -> Optional[bytes]:
    """Shortcut for ``PathResolver(store, hash_factory).resolve(root_digest, name)``."""
    return PathResolver(store, hash_factory).resolve(root_digest, name)
