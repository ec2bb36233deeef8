"""Sharded on-disk blob store for merkledag.

Blobs are stored under objects/ keyed by the hex form of their digest, with
Git-like two-character sharding and atomic writes. Unlike a plain
content-addressable store the key is supplied by the caller: tree objects are
keyed by the hash of their children's digests, not by their own bytes.
"""

import logging
import os
import tempfile
from pathlib import Path

from merkledag.constants import DIGEST_SIZE, OBJECTS_DIR
from merkledag.errors import BlobNotFoundError, StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


class FileBlobStore:
    """Blob store persisting each key as one file.

    Storage layout:
        <store_dir>/objects/<hex[:2]>/<hex[2:]>

    Attributes:
        store_dir: Root directory of the store
        objects_dir: Path to the objects directory

    Example:
        >>> store = FileBlobStore.init(Path(".merkledag"))
        >>> store.put(digest, b"hello")
        >>> assert store.get(digest) == b"hello"
    """

    def __init__(self, store_dir: Path, digest_size: int = DIGEST_SIZE) -> None:
        """Initialize the blob store.

        Args:
            store_dir: Path to the store directory
            digest_size: Expected key length in bytes

        Raises:
            ValueError: If store_dir doesn't exist
        """
        self.store_dir = Path(store_dir)
        self.objects_dir = self.store_dir / OBJECTS_DIR
        self.digest_size = digest_size

        if not self.store_dir.exists():
            raise ValueError(f"Store directory not found: {store_dir}")

    @classmethod
    def init(cls, store_dir: Path, digest_size: int = DIGEST_SIZE) -> "FileBlobStore":
        """Create the store layout (if missing) and open it."""
        store_dir = Path(store_dir)
        (store_dir / OBJECTS_DIR).mkdir(parents=True, exist_ok=True)
        return cls(store_dir, digest_size)

    def put(self, key: bytes, value: bytes) -> None:
        """Write value under key.

        If the key already exists the write is skipped (deduplication). Uses
        atomic write (tmp file + rename) to prevent partially written blobs.

        Args:
            key: Raw digest
            value: Bytes to store

        Raises:
            StoreWriteError: If the key is malformed or the write fails
        """
        try:
            self._validate_key(key)
        except ValueError as e:
            raise StoreWriteError(str(e)) from e

        blob_path = self._get_blob_path(key)
        if blob_path.exists():
            return

        try:
            blob_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_path = tempfile.mkstemp(
                dir=blob_path.parent,
                prefix=".tmp_",
                suffix=".blob",
            )
        except OSError as e:
            raise StoreWriteError(f"Failed to write blob {key.hex()}: {e}") from e

        try:
            with os.fdopen(tmp_fd, "wb") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())

            try:
                os.replace(tmp_path, blob_path)
            except OSError:
                # Another writer got there first with the same content
                if blob_path.exists():
                    os.unlink(tmp_path)
                    return
                raise
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreWriteError(f"Failed to write blob {key.hex()}: {e}") from e

        logger.debug("wrote %s (%d bytes)", key.hex()[:12], len(value))

    def get(self, key: bytes) -> bytes:
        """Read the bytes stored under key.

        Raises:
            BlobNotFoundError: If the key doesn't exist
            StoreReadError: If the key is malformed or the read fails
        """
        try:
            self._validate_key(key)
        except ValueError as e:
            raise StoreReadError(str(e)) from e

        blob_path = self._get_blob_path(key)
        if not blob_path.exists():
            raise BlobNotFoundError(f"Blob not found: {key.hex()} (tried {blob_path})")

        try:
            return blob_path.read_bytes()
        except OSError as e:
            raise StoreReadError(f"Failed to read blob {key.hex()}: {e}") from e

    def exists(self, key: bytes) -> bool:
        """Check if a key exists in the store."""
        try:
            self._validate_key(key)
        except ValueError:
            return False
        return self._get_blob_path(key).exists()

    def get_size(self, key: bytes) -> int:
        """Get the size of a stored blob in bytes.

        Raises:
            BlobNotFoundError: If the key doesn't exist
            StoreReadError: If the key is malformed
        """
        try:
            self._validate_key(key)
        except ValueError as e:
            raise StoreReadError(str(e)) from e

        blob_path = self._get_blob_path(key)
        if not blob_path.exists():
            raise BlobNotFoundError(f"Blob not found: {key.hex()}")
        return blob_path.stat().st_size

    def _get_blob_path(self, key: bytes) -> Path:
        """Get the filesystem path for a key: objects/<hex[:2]>/<hex[2:]>."""
        hex_key = key.hex()
        return self.objects_dir / hex_key[:2] / hex_key[2:]

    def _validate_key(self, key: bytes) -> None:
        """Validate that a key is a raw digest of the expected length.

        Raises:
            ValueError: If key is invalid
        """
        if not isinstance(key, (bytes, bytearray)):
            raise ValueError(f"Key must be bytes, got {type(key).__name__}")

        if len(key) != self.digest_size:
            raise ValueError(f"Key must be {self.digest_size} bytes, got {len(key)}")
