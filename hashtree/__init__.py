"""
hashtree - Merkle tree construction and verification over byte streams.

    from hashtree import HashTree

    tree = HashTree.create(open("image.iso", "rb"), block_size=4096, strategy="sha256")
    print(tree.root_hex(), tree.num_blocks(), tree.num_nodes())
"""

__version__ = "0.1.0"

from hashtree.crypto import HashAlgorithm, HashlibStrategy, HashStrategy, get_strategy
from hashtree.merkle import HashTree, Node, NodeArena
from hashtree.schemas import (
    ConfigurationException,
    HashTreeException,
    StreamReadException,
    TreeSummary,
)

__all__ = [
    "__version__",
    "HashTree",
    "Node",
    "NodeArena",
    "HashAlgorithm",
    "HashlibStrategy",
    "HashStrategy",
    "get_strategy",
    "HashTreeException",
    "ConfigurationException",
    "StreamReadException",
    "TreeSummary",
]
