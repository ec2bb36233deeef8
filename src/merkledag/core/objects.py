"""DAG object model and its persisted encoding.

An object is either blob-shaped (raw ``data``, no links) or tree-shaped
(ordered ``links``, no data). Blob-shaped objects are stored as their raw
bytes. Tree-shaped objects are stored as a MessagePack map::

    {"links": [{"name": str, "hash": bin, "size": int}, ...], "data": bin}

Digests travel as msgpack ``bin`` values, so link hashes are persisted in
their raw byte form.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import msgpack

from merkledag.constants import DATA_FIELD, LINKS_FIELD
from merkledag.errors import SerializationError


@dataclass(frozen=True)
class Link:
    """Reference from a parent object to a child.

    Attributes:
        name: Entry name for directory children; empty for chunk links
        hash: Raw digest of the child
        size: Stored byte length of the child (0 when unset)
    """

    hash: bytes
    name: str = ""
    size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "hash": bytes(self.hash), "size": self.size}


@dataclass(frozen=True)
class DagObject:
    """Unit persisted in the blob store.

    Attributes:
        links: Ordered child references (tree shape)
        data: Raw payload (blob shape)
    """

    links: Tuple[Link, ...] = ()
    data: bytes = b""

    def __post_init__(self) -> None:
        if self.links and self.data:
            raise ValueError("DagObject cannot carry both data and links")
        # Accept any sequence of links but store an immutable tuple
        object.__setattr__(self, "links", tuple(self.links))

    @property
    def is_tree(self) -> bool:
        return not self.data

    def find_link(self, name: str) -> Optional[Link]:
        """Return the first link named exactly ``name``, or None."""
        for link in self.links:
            if link.name == name:
                return link
        return None


def encode_object(obj: DagObject) -> bytes:
    """Serialize a tree-shaped object to its persisted envelope.

    Raises:
        SerializationError: If the object cannot be packed
    """
    record = {
        LINKS_FIELD: [link.to_dict() for link in obj.links],
        DATA_FIELD: bytes(obj.data),
    }
    try:
        return msgpack.packb(record, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise SerializationError(f"Failed to encode object: {e}") from e


def decode_object(raw: bytes) -> DagObject:
    """Parse a persisted envelope back into a DagObject.

    Raises:
        SerializationError: If raw is not a valid object envelope
    """
    try:
        record = msgpack.unpackb(raw, raw=False, strict_map_key=True)
    except (msgpack.exceptions.ExtraData, msgpack.exceptions.UnpackException, ValueError) as e:
        raise SerializationError(f"Failed to decode object: {e}") from e

    if not isinstance(record, dict) or LINKS_FIELD not in record:
        raise SerializationError("Failed to decode object: not an object envelope")

    raw_links = record[LINKS_FIELD]
    data = record.get(DATA_FIELD, b"")
    if not isinstance(raw_links, list) or not isinstance(data, bytes):
        raise SerializationError("Failed to decode object: malformed envelope fields")

    links = []
    for i, entry in enumerate(raw_links):
        if not isinstance(entry, dict):
            raise SerializationError(f"Failed to decode object: link {i} is not a record")
        name = entry.get("name", "")
        digest = entry.get("hash")
        size = entry.get("size", 0)
        if (
            not isinstance(name, str)
            or not isinstance(digest, bytes)
            or not isinstance(size, int)
            or isinstance(size, bool)
        ):
            raise SerializationError(f"Failed to decode object: link {i} is malformed")
        links.append(Link(hash=digest, name=name, size=size))

    try:
        return DagObject(links=tuple(links), data=data)
    except ValueError as e:
        raise SerializationError(f"Failed to decode object: {e}") from e
