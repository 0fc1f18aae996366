"""
Module 06 - HashTree
Public surface of the hash tree: construction, root access, equality.

A HashTree is built once from a byte stream and is immutable
afterwards. There is no insert/update: when the data changes,
build a new tree.

Equality Contract:
- Two empty trees are equal
- Two non-empty trees are equal iff their root digests are byte-equal
- This trusts the collision resistance of the hash strategy; no
  structural comparison is performed

Usage:
    from hashtree import HashTree

    tree = HashTree.create(open("data.bin", "rb"), block_size=4096)
    tree.root_hex()
    tree.num_blocks(), tree.num_nodes()
"""
from __future__ import annotations

import logging
import os
from typing import Iterator, Optional

from hashtree.config.runtime import TreeConfig
from hashtree.crypto.hashing import HashStrategy, StrategyLike, get_strategy
from hashtree.merkle.arena import Node, NodeArena
from hashtree.merkle.builder import build_tree, compute_tree_depth, hash_blocks
from hashtree.schemas.errors import StreamReadException
from hashtree.schemas.summary import TreeSummary
from hashtree.stream.chunker import StreamLike, iter_blocks, validate_block_size


logger = logging.getLogger(__name__)


class HashTree:
    """
    A Merkle tree over fixed-size blocks of a byte stream.

    Nodes live in a flat NodeArena: the first num_blocks entries are the
    leaves, the last entry is the root.
    """

    __slots__ = ("_arena", "_num_blocks", "_block_size", "_strategy")

    def __init__(
        self,
        arena: NodeArena,
        num_blocks: int,
        block_size: int,
        strategy: HashStrategy,
    ) -> None:
        if (num_blocks == 0) != (len(arena) == 0):
            raise ValueError(
                f"num_blocks={num_blocks} is inconsistent with arena of {len(arena)} nodes"
            )
        self._arena = arena if arena.frozen else arena.copy().freeze()
        self._num_blocks = num_blocks
        self._block_size = validate_block_size(block_size)
        self._strategy = strategy

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        stream: StreamLike,
        block_size: Optional[int] = None,
        strategy: Optional[StrategyLike] = None,
        *,
        config: Optional[TreeConfig] = None,
    ) -> "HashTree":
        """
        Build a tree from a readable byte stream.

        Args:
            stream: Readable byte source (file, BytesIO, ...) or bytes
            block_size: Block size in bytes; defaults to config.block_size
            strategy: HashStrategy, HashAlgorithm or algorithm name;
                      defaults to config.algorithm
            config: Fallback settings; defaults to TreeConfig()

        Returns:
            Fully built, immutable HashTree

        Raises:
            ConfigurationException: Invalid block size or algorithm
                (raised before anything is read)
            StreamReadException: The stream could not be read
        """
        if block_size is None or strategy is None:
            config = config or TreeConfig()
        if block_size is None:
            block_size = config.block_size
        hasher = config.strategy() if strategy is None else get_strategy(strategy)

        blocks = iter_blocks(stream, block_size)
        arena = build_tree(hash_blocks(blocks, hasher), hasher)

        num_blocks = _count_leaves(arena)
        return cls(arena, num_blocks, block_size, hasher)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        block_size: Optional[int] = None,
        strategy: Optional[StrategyLike] = None,
        *,
        config: Optional[TreeConfig] = None,
    ) -> "HashTree":
        """Build a tree from an in-memory buffer."""
        return cls.create(data, block_size, strategy, config=config)

    @classmethod
    def from_file(
        cls,
        path: str | os.PathLike,
        block_size: Optional[int] = None,
        strategy: Optional[StrategyLike] = None,
        *,
        config: Optional[TreeConfig] = None,
    ) -> "HashTree":
        """
        Build a tree from the contents of a file.

        Raises:
            ConfigurationException: Invalid block size or algorithm
            StreamReadException: The file could not be opened or read
        """
        # Validate before touching the filesystem
        if block_size is not None:
            validate_block_size(block_size)
        if strategy is not None:
            strategy = get_strategy(strategy)

        try:
            f = open(path, "rb")
        except OSError as e:
            raise StreamReadException(
                f"Failed to open {os.fspath(path)}: {e}",
                details={"path": os.fspath(path)},
            ) from e

        with f:
            logger.debug(f"hashing file {os.fspath(path)}")
            return cls.create(f, block_size, strategy, config=config)

    @classmethod
    def empty(
        cls,
        block_size: Optional[int] = None,
        strategy: Optional[StrategyLike] = None,
    ) -> "HashTree":
        """An empty tree (no blocks, no root)."""
        config = TreeConfig()
        hasher = config.strategy() if strategy is None else get_strategy(strategy)
        return cls(
            NodeArena().freeze(),
            0,
            config.block_size if block_size is None else block_size,
            hasher,
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def root_hash(self) -> Optional[bytes]:
        """Root digest, or None if the tree is empty."""
        root = self._arena.root
        return root.hash if root is not None else None

    def root_hex(self) -> Optional[str]:
        root = self.root_hash()
        return root.hex() if root is not None else None

    def root(self) -> Optional[Node]:
        return self._arena.root

    def num_blocks(self) -> int:
        """Number of data blocks used to construct the tree."""
        return self._num_blocks

    def num_nodes(self) -> int:
        """Number of nodes in the tree, padding duplicates included."""
        return len(self._arena)

    def is_empty(self) -> bool:
        return self._num_blocks == 0

    def depth(self) -> int:
        return compute_tree_depth(self._num_blocks)

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def algorithm(self) -> str:
        return self._strategy.name

    @property
    def strategy(self) -> HashStrategy:
        return self._strategy

    def node(self, index: int) -> Node:
        """
        Node at an arena index.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self._arena):
            raise IndexError(
                f"Node index {index} out of range for {len(self._arena)} nodes"
            )
        return self._arena[index]

    def nodes(self) -> tuple[Node, ...]:
        """All nodes in arena order."""
        return self._arena[:]

    def leaves(self) -> tuple[Node, ...]:
        """Leaf nodes of the real data blocks, in block order."""
        return self._arena[: self._num_blocks]

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def _expands(self, node: Node) -> bool:
        # Padding nodes repeat a subtree already reachable through the original
        return not node.is_leaf and not node.is_padding

    def iter_preorder(self) -> Iterator[Node]:
        """Root, then left subtree, then right subtree. Each node is yielded once."""
        root = self._arena.root
        if root is None:
            return
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            if self._expands(node):
                stack.append(self._arena[node.right])
                stack.append(self._arena[node.left])

    def iter_inorder(self) -> Iterator[Node]:
        """Left subtree, then node, then right subtree."""
        stack: list[Node] = []
        node = self._arena.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = self._arena[node.left] if self._expands(node) else None
            node = stack.pop()
            yield node
            node = self._arena[node.right] if self._expands(node) else None

    def iter_postorder(self) -> Iterator[Node]:
        """Left subtree, then right subtree, then node."""
        root = self._arena.root
        if root is None:
            return
        stack: list[tuple[Node, bool]] = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded or not self._expands(node):
                yield node
                continue
            stack.append((node, True))
            stack.append((self._arena[node.right], False))
            stack.append((self._arena[node.left], False))

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def verify(self, stream: StreamLike) -> bool:
        """
        Check whether ``stream`` has the same content this tree was built from.

        Rebuilds a tree with this tree's block size and strategy and
        compares roots.

        Raises:
            StreamReadException: The stream could not be read
        """
        other = HashTree.create(stream, self._block_size, self._strategy)
        matches = other == self
        if not matches:
            logger.info(f"root mismatch: expected {self.root_hex()}, got {other.root_hex()}")
        return matches

    def summary(self) -> TreeSummary:
        return TreeSummary(
            root_hash=self.root_hex(),
            algorithm=self.algorithm,
            block_size=self._block_size,
            num_blocks=self._num_blocks,
            num_nodes=self.num_nodes(),
            depth=self.depth(),
        )

    # -------------------------------------------------------------------------
    # Copy / equality
    # -------------------------------------------------------------------------

    def copy(self) -> "HashTree":
        """Flat O(n) copy of the arena."""
        return HashTree(self._arena.copy(), self._num_blocks, self._block_size, self._strategy)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "HashTree":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashTree):
            return NotImplemented
        return self.root_hash() == other.root_hash()

    def __hash__(self) -> int:
        return hash(self.root_hash())

    def __repr__(self) -> str:
        root = self.root_hex()
        shown = f"{root[:16]}..." if root else None
        return (
            f"HashTree(algorithm={self.algorithm!r}, blocks={self._num_blocks}, "
            f"nodes={self.num_nodes()}, root={shown})"
        )


def _count_leaves(arena: NodeArena) -> int:
    # Real leaves are the leading run of childless, non-padding nodes
    count = 0
    for node in arena:
        if not node.is_leaf or node.is_padding:
            break
        count += 1
    return count


__all__ = [
    "HashTree",
]
