"""
Module 02 - Hashing Strategies
Pluggable digest functions for leaf and parent hashing.

This module provides:
- HashStrategy protocol: anything with name, digest_size and hash(bytes)
- HashAlgorithm enum of named hashlib algorithms
- HashlibStrategy: a HashStrategy backed by hashlib
- get_strategy: resolve an algorithm name / enum / strategy object
- combine: the parent-digest rule, hash(left + right)

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Parent digests are computed over the raw child digest bytes,
  never over any string rendering of them
- Collision resistance of the tree is exactly that of the strategy
"""
from __future__ import annotations

import hashlib
from enum import Enum
from typing import Protocol, Union, runtime_checkable

from hashtree.schemas.errors import ConfigurationException, ErrorCodes


@runtime_checkable
class HashStrategy(Protocol):
    """
    Protocol for digest functions injected into the tree.

    Implementations must be pure and deterministic: the same bytes
    produce the same digest across calls and across processes.
    """

    name: str
    digest_size: int

    def hash(self, data: bytes) -> bytes:
        """Return the digest of ``data``."""
        ...


class HashAlgorithm(str, Enum):
    """Named algorithms resolvable to a HashlibStrategy."""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_256 = "sha3_256"
    SHA3_512 = "sha3_512"
    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"


DEFAULT_ALGORITHM = HashAlgorithm.SHA256


class HashlibStrategy:
    """
    HashStrategy backed by a hashlib constructor.

    Example:
        >>> HashlibStrategy(HashAlgorithm.SHA256).hash(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """

    __slots__ = ("algorithm", "name", "digest_size")

    def __init__(self, algorithm: HashAlgorithm | str = DEFAULT_ALGORITHM) -> None:
        self.algorithm = resolve_algorithm(algorithm)
        self.name = self.algorithm.value
        self.digest_size = hashlib.new(self.name).digest_size

    def hash(self, data: bytes) -> bytes:
        return hashlib.new(self.name, data).digest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashlibStrategy):
            return NotImplemented
        return self.algorithm is other.algorithm

    def __hash__(self) -> int:
        return hash(self.algorithm)

    def __repr__(self) -> str:
        return f"HashlibStrategy({self.name!r})"


StrategyLike = Union[HashStrategy, HashAlgorithm, str]


def resolve_algorithm(algorithm: HashAlgorithm | str) -> HashAlgorithm:
    """
    Resolve an algorithm identifier to a HashAlgorithm.

    Names are matched case-insensitively and "-" is treated as "_",
    so "SHA3-256" resolves to HashAlgorithm.SHA3_256.

    Raises:
        ConfigurationException: If the name is not a supported algorithm
    """
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    if not isinstance(algorithm, str):
        raise ConfigurationException(
            f"Hash algorithm must be a name or HashAlgorithm, got {type(algorithm).__name__}",
            field_name="algorithm",
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
        )

    normalized = algorithm.strip().lower().replace("-", "_")
    try:
        return HashAlgorithm(normalized)
    except ValueError:
        supported = ", ".join(a.value for a in HashAlgorithm)
        raise ConfigurationException(
            f"Unsupported hash algorithm: {algorithm!r} (supported: {supported})",
            field_name="algorithm",
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details={"algorithm": algorithm},
        ) from None


def get_strategy(strategy: StrategyLike | None = None) -> HashStrategy:
    """
    Resolve a strategy specifier to a HashStrategy.

    Args:
        strategy: A HashStrategy instance (returned as-is), a HashAlgorithm,
                  an algorithm name, or None for the default (sha256)

    Returns:
        A HashStrategy

    Raises:
        ConfigurationException: If the specifier cannot be resolved
    """
    if strategy is None:
        return HashlibStrategy(DEFAULT_ALGORITHM)
    if isinstance(strategy, (HashAlgorithm, str)):
        return HashlibStrategy(strategy)
    if isinstance(strategy, HashStrategy):
        return strategy
    raise ConfigurationException(
        f"Not a hash strategy: {strategy!r}",
        field_name="strategy",
        code=ErrorCodes.UNSUPPORTED_ALGORITHM,
    )


def combine(strategy: HashStrategy, left: bytes, right: bytes) -> bytes:
    """
    Compute the parent digest of two child digests.

    parent = hash(left + right), concatenating raw digest bytes
    in left-then-right order.

    Args:
        strategy: Digest function used throughout the tree
        left: Left child digest
        right: Right child digest

    Returns:
        Parent digest
    """
    return bytes(strategy.hash(bytes(left) + bytes(right)))


__all__ = [
    "HashStrategy",
    "HashAlgorithm",
    "HashlibStrategy",
    "DEFAULT_ALGORITHM",
    "StrategyLike",
    "resolve_algorithm",
    "get_strategy",
    "combine",
]
