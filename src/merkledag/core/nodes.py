"""Tree node abstraction consumed by the DAG builder.

A node is a tagged variant: its ``type`` attribute is either
``NodeType.FILE`` (exposing ``read_bytes()``) or ``NodeType.DIRECTORY``
(exposing ``children()``). The builder dispatches on the tag only, so any
object with the right shape can be added: in-memory trees, path-backed
adapters, or archive readers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Protocol, Tuple, Union


class NodeType(Enum):
    """Variant tag of a tree node."""

    FILE = "file"
    DIRECTORY = "directory"


class FileNode(Protocol):
    type: NodeType

    def read_bytes(self) -> bytes:
        ...


class DirectoryNode(Protocol):
    type: NodeType

    def children(self) -> Iterator[Tuple[str, "TreeNode"]]:
        """Yield (name, node) pairs; each call starts a fresh iteration."""
        ...


TreeNode = Union[FileNode, DirectoryNode]


@dataclass(frozen=True)
class File:
    """In-memory file node."""

    content: bytes = b""
    type: NodeType = field(default=NodeType.FILE, init=False)

    def read_bytes(self) -> bytes:
        return self.content

    def __len__(self) -> int:
        return len(self.content)


@dataclass
class Directory:
    """In-memory directory node.

    Entries keep insertion order; the builder does not depend on that order
    for the directory digest.

    Example:
        >>> d = Directory()
        >>> d.add("a.txt", File(b"hello")).add("b.txt", File(b"world"))
    """

    entries: List[Tuple[str, TreeNode]] = field(default_factory=list)
    type: NodeType = field(default=NodeType.DIRECTORY, init=False)

    def add(self, name: str, node: TreeNode) -> "Directory":
        self.entries.append((name, node))
        return self

    def children(self) -> Iterator[Tuple[str, TreeNode]]:
        return iter(list(self.entries))

    def __len__(self) -> int:
        return len(self.entries)
