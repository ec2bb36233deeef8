"""Merkle DAG construction.

This module turns a tree of file and directory nodes into objects persisted
in a blob store, returning the digest of the root.
"""

import hashlib
import logging
from typing import List, Optional, Tuple

from merkledag.constants import MAX_BLOB_SIZE
from merkledag.core.chunker import needs_chunking, split_chunks
from merkledag.core.hashing import HashFactory, Hasher, digest_of
from merkledag.core.nodes import NodeType, TreeNode
from merkledag.core.objects import DagObject, Link, encode_object
from merkledag.errors import SerializationError, UnsupportedNodeError
from merkledag.storage.blob_store import BlobStore

logger = logging.getLogger(__name__)


class DagBuilder:
    """Builder writing a node tree into a blob store as a Merkle DAG.

    Files up to ``chunk_size`` bytes are stored raw under the hash of their
    content. Larger files are split into chunks, each stored raw under its
    own hash, plus a tree object linking the chunks in order; its key is the
    hash of the concatenated chunk digests. Directories are stored as a tree
    object keyed by the hash of their children's digests sorted ascending,
    which makes the directory digest independent of enumeration order.

    Store and serialization errors propagate unchanged; objects written
    before the failure stay in the store.

    Attributes:
        store: Blob store receiving every object
        hash_factory: Zero-argument callable returning a fresh hasher
        chunk_size: Chunking threshold and chunk length in bytes

    Example:
        >>> store = MemoryBlobStore()
        >>> root = DagBuilder(store).add(Directory().add("a.txt", File(b"hello")))
    """

    def __init__(
        self,
        store: BlobStore,
        hash_factory: HashFactory = hashlib.sha256,
        chunk_size: int = MAX_BLOB_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}")
        self.store = store
        self.hash_factory = hash_factory
        self.chunk_size = chunk_size

    def add(self, node: TreeNode, hasher: Optional[Hasher] = None) -> bytes:
        """Store node and everything below it.

        Args:
            node: File or directory node
            hasher: Accumulator for the node's own digest; a fresh one is
                taken from hash_factory when omitted

        Returns:
            Raw digest of the root object

        Raises:
            UnsupportedNodeError: If a node is neither FILE nor DIRECTORY
            StoreWriteError: If the store rejects a put
            SerializationError: If a tree object cannot be encoded
        """
        digest, size = self._add(node, hasher if hasher is not None else self.hash_factory())
        logger.info("added %s (%d bytes stored at root)", digest.hex(), size)
        return digest

    def _add(self, node: TreeNode, hasher: Hasher) -> Tuple[bytes, int]:
        """Dispatch on the node tag; return (digest, stored size)."""
        node_type = getattr(node, "type", None)
        if node_type is NodeType.FILE:
            return self._add_file(node.read_bytes(), hasher)
        if node_type is NodeType.DIRECTORY:
            return self._add_directory(node, hasher)
        raise UnsupportedNodeError(f"Unsupported node type: {node_type!r}")

    def _add_file(self, data: bytes, hasher: Hasher) -> Tuple[bytes, int]:
        if not needs_chunking(data, self.chunk_size):
            hasher.update(data)
            digest = hasher.digest()
            self.store.put(digest, data)
            logger.debug("blob %s (%d bytes)", digest.hex()[:12], len(data))
            return digest, len(data)

        links: List[Link] = []
        for chunk in split_chunks(data, self.chunk_size):
            chunk_digest = digest_of(chunk, self.hash_factory)
            self.store.put(chunk_digest, chunk)
            links.append(Link(hash=chunk_digest))

        for link in links:
            hasher.update(link.hash)
        digest = hasher.digest()

        encoded = self._encode_tree(digest, links)
        self.store.put(digest, encoded)
        logger.debug(
            "chunked file %s (%d bytes, %d chunks)", digest.hex()[:12], len(data), len(links)
        )
        return digest, len(encoded)

    def _add_directory(self, node: TreeNode, hasher: Hasher) -> Tuple[bytes, int]:
        links: List[Link] = []
        for name, child in node.children():
            child_digest, child_size = self._add(child, self.hash_factory())
            links.append(Link(hash=child_digest, name=name, size=child_size))

        # Canonical order: digest first, name breaks ties between equal content
        links.sort(key=lambda link: (link.hash, link.name))
        for link in links:
            hasher.update(link.hash)
        digest = hasher.digest()

        encoded = self._encode_tree(digest, links)
        self.store.put(digest, encoded)
        logger.debug("tree %s (%d links)", digest.hex()[:12], len(links))
        return digest, len(encoded)

    def _encode_tree(self, digest: bytes, links: List[Link]) -> bytes:
        try:
            return encode_object(DagObject(links=tuple(links)))
        except SerializationError as e:
            raise SerializationError(f"Failed to encode tree {digest.hex()}: {e}") from e


def add(
    store: BlobStore,
    node: TreeNode,
    hasher: Optional[Hasher] = None,
    hash_factory: Optional[HashFactory] = None,
) -> bytes:
    """Shortcut for ``DagBuilder(store, hash_factory).add(node, hasher)``."""
    builder = DagBuilder(store) if hash_factory is None else DagBuilder(store, hash_factory)
    return builder.add(node, hasher)
