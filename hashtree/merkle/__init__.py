"""
Hash tree construction.

Canonical Commitment Rules:
1. Leaf hashing: leaf = hash(block)
2. Parent hashing: parent = hash(left + right)
3. Padding: Duplicate last node if odd number at any level
4. Empty input: empty tree, no root
5. Single block: root = leaf

Usage:
    from hashtree.merkle import HashTree

    tree = HashTree.create(stream, block_size=1024, strategy="sha256")
    assert tree == HashTree.create(same_stream, block_size=1024, strategy="sha256")
"""
from .arena import Node, NodeArena
from .builder import (
    build_tree,
    compute_num_nodes,
    compute_tree_depth,
    hash_blocks,
)
from .tree import HashTree


__all__ = [
    # Core types
    "Node",
    "NodeArena",
    "HashTree",
    # Core functions
    "build_tree",
    "hash_blocks",
    "compute_num_nodes",
    "compute_tree_depth",
]
