"""Core engine layer for merkledag.

This module provides the tree node abstraction, the object model and codec,
and the two DAG operations: building (add) and name resolution (resolve).
"""

from merkledag.core.builder import DagBuilder, add
from merkledag.core.chunker import split_chunks
from merkledag.core.hashing import hash_factory
from merkledag.core.nodes import Directory, File, NodeType, TreeNode
from merkledag.core.objects import DagObject, Link, decode_object, encode_object
from merkledag.core.resolver import PathResolver, resolve

__all__ = [
    "DagBuilder",
    "PathResolver",
    "add",
    "resolve",
    "split_chunks",
    "hash_factory",
    "NodeType",
    "TreeNode",
    "File",
    "Directory",
    "Link",
    "DagObject",
    "encode_object",
    "decode_object",
]
