"""Hash function provider.

A hash factory is any zero-argument callable returning a fresh hashlib-style
accumulator (``update``/``digest``). Each logical hashing task gets its own
instance; accumulators are never shared between sibling computations.
"""

import hashlib
from typing import Callable, Protocol

from merkledag.constants import HASH_ALGORITHM


class Hasher(Protocol):
    """Incremental accumulator with a fixed-length digest."""

    def update(self, data: bytes) -> None:
        ...

    def digest(self) -> bytes:
        ...


HashFactory = Callable[[], Hasher]


def hash_factory(name: str = HASH_ALGORITHM) -> HashFactory:
    """Return a factory producing fresh hashers for a hashlib algorithm.

    Args:
        name: hashlib algorithm name (default: sha256)

    Raises:
        ValueError: If the algorithm is not available or has no fixed
            digest length (SHAKE)
    """
    if name not in hashlib.algorithms_available:
        raise ValueError(f"Unsupported hash algorithm: {name}")
    if hashlib.new(name).digest_size == 0:
        raise ValueError(f"Hash algorithm has variable-length output: {name}")

    def new() -> Hasher:
        return hashlib.new(name)

    new.__name__ = name
    return new


def digest_of(data: bytes, factory: HashFactory = hashlib.sha256) -> bytes:
    """Hash data with a fresh accumulator and return the raw digest."""
    hasher = factory()
    hasher.update(data)
    return hasher.digest()


def empty_digest(factory: HashFactory = hashlib.sha256) -> bytes:
    """Digest of no input: the key shared by empty files and empty directories."""
    return factory().digest()
