"""
Module 05 - Tree Builder
Bottom-up, level-by-level construction of the hash tree.

Canonical Construction Rules (Hard Contracts):
1. Leaves: one node per data block, leaf.hash = hash(block)
2. Parent hashing: parent = hash(left.hash + right.hash)
3. Padding rule: if a level has an odd number (> 1) of nodes, append a
   duplicate of its last node (same digest, not re-hashed, not a block)
4. Pairing: (0, 1), (2, 3), ... sequential and disjoint
5. Single leaf: root = leaf
6. Empty input: empty arena, no root

Determinism Notes:
- No randomness or unordered containers
- Shape depends only on the number of blocks
- Iterative loop; stack usage does not grow with tree height
"""
from __future__ import annotations

import logging
from typing import Iterable

from hashtree.crypto.hashing import HashStrategy, combine
from hashtree.merkle.arena import NodeArena


logger = logging.getLogger(__name__)


def hash_blocks(blocks: Iterable[bytes], strategy: HashStrategy) -> Iterable[bytes]:
    """Lazily map each block to its leaf digest."""
    for block in blocks:
        yield bytes(strategy.hash(block))


def build_tree(leaf_digests: Iterable[bytes], strategy: HashStrategy) -> NodeArena:
    """
    Build a frozen arena from leaf digests.

    Algorithm:
    1. Append one leaf per digest, in order
    2. While the current level has more than one node:
       - If odd, append a duplicate of the last node
       - Pair adjacent nodes and append their parents
       - The parents become the current level
    3. Freeze the arena; its last entry is the root

    Example: [a, b, c] -> [a, b, c, c'] -> [ab, cc'] -> [root]
    giving 3 leaves + 1 duplicate + 2 parents + 1 root = 7 nodes.

    Args:
        leaf_digests: Digest of each data block, in block order.
                      May be a lazy iterator; it is consumed once.
        strategy: Digest function used to combine siblings

    Returns:
        Frozen NodeArena
    """
    arena = NodeArena()
    for digest in leaf_digests:
        arena.append_leaf(digest)

    num_blocks = len(arena)
    level: list[int] = list(range(num_blocks))
    depth = 1 if level else 0

    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(arena.append_duplicate(level[-1]).index)

        parents: list[int] = []
        for i in range(0, len(level), 2):
            n1 = arena[level[i]]
            n2 = arena[level[i + 1]]
            parent = arena.append_parent(
                combine(strategy, n1.hash, n2.hash),
                left=n1.index,
                right=n2.index,
            )
            parents.append(parent.index)

        logger.debug(f"level {depth}: {len(level)} nodes -> {len(parents)} parents")
        level = parents
        depth += 1

    arena.freeze()
    logger.info(
        f"built hash tree: {num_blocks} blocks, {len(arena)} nodes, depth {depth} ({strategy.name})"
    )
    return arena


def compute_num_nodes(num_blocks: int) -> int:
    """
    Number of arena entries a tree over ``num_blocks`` blocks holds.

    nodes(0) = 0, nodes(1) = 1, and for n > 1 with p = n + n % 2:
    nodes(n) = p + nodes(p / 2)

    Examples:
        >>> compute_num_nodes(2)
        3
        >>> compute_num_nodes(3)
        7
    """
    if num_blocks < 0:
        raise ValueError(f"num_blocks must be non-negative, got {num_blocks}")

    total = 0
    n = num_blocks
    while n > 1:
        n += n % 2
        total += n
        n //= 2
    return total + n


def compute_tree_depth(num_blocks: int) -> int:
    """
    Compute the depth of a tree with given number of blocks.

    Depth is the number of levels from leaves to root (inclusive).
    A single block has depth 1, two blocks have depth 2, etc.

    Args:
        num_blocks: Number of data blocks

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_blocks == 0:
        return 0
    if num_blocks == 1:
        return 1

    depth = 1
    n = num_blocks
    while n > 1:
        # Account for padding
        if n % 2 == 1:
            n += 1
        n = n // 2
        depth += 1

    return depth


__all__ = [
    "hash_blocks",
    "build_tree",
    "compute_num_nodes",
    "compute_tree_depth",
]
