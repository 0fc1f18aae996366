"""
Module 04 - Node Arena
Flat, index-addressed, append-only node storage.

Nodes never own their children. A parent refers to its children by
their position in the same arena, so copying a tree is a flat list
copy and walking it never recurses.

Layout after a build:
- [0, num_blocks): real leaves, in block order
- [num_blocks, len - 1): padding duplicates and parents, in the
  order they were produced
- len - 1: the root
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, overload


@dataclass(frozen=True)
class Node:
    """
    A single entry of the arena.

    Attributes:
        hash: Digest of the block (leaf) or of the two child digests (parent)
        index: Position of this node in its arena
        left: Arena index of the left child, None for leaves
        right: Arena index of the right child, None for leaves
        duplicate_of: For padding nodes, the index of the node duplicated
    """
    hash: bytes
    index: int
    left: Optional[int] = None
    right: Optional[int] = None
    duplicate_of: Optional[int] = None

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Node index must be non-negative, got {self.index}")
        if (self.left is None) != (self.right is None):
            raise ValueError("A node has either two children or none")

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    @property
    def is_padding(self) -> bool:
        return self.duplicate_of is not None

    def hex(self) -> str:
        return self.hash.hex()

    def __str__(self) -> str:
        return f"[Node {self.index}] hash: {self.hash.hex()}"


class NodeArena(Sequence[Node]):
    """
    Append-only node store, frozen once the build finishes.

    The arena assigns indices itself: every appended node gets
    index == len(arena) at the time of the append.
    """

    __slots__ = ("_nodes", "_frozen")

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self._nodes: list[Node] = []
        self._frozen = False
        for node in nodes:
            if node.index != len(self._nodes):
                raise ValueError(
                    f"Node index {node.index} does not match its position {len(self._nodes)}"
                )
            self._check_children(node.left, node.right)
            self._nodes.append(node)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def append_leaf(self, digest: bytes) -> Node:
        """Append a leaf for one data block."""
        return self._append(Node(hash=bytes(digest), index=len(self._nodes)))

    def append_parent(self, digest: bytes, left: int, right: int) -> Node:
        """Append a parent referring to two earlier entries."""
        self._check_children(left, right)
        return self._append(
            Node(hash=bytes(digest), index=len(self._nodes), left=left, right=right)
        )

    def append_duplicate(self, index: int) -> Node:
        """
        Append a copy of an existing node to pad an odd level.

        The copy keeps the digest and children of the original; it is not
        re-hashed.
        """
        original = self._nodes[index]
        return self._append(
            Node(
                hash=original.hash,
                index=len(self._nodes),
                left=original.left,
                right=original.right,
                duplicate_of=original.index,
            )
        )

    def freeze(self) -> "NodeArena":
        """Disallow further appends. Returns self."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "NodeArena":
        """Flat copy; nodes are immutable and shared."""
        clone = NodeArena()
        clone._nodes = list(self._nodes)
        clone._frozen = self._frozen
        return clone

    def _append(self, node: Node) -> Node:
        if self._frozen:
            raise RuntimeError("Cannot append to a frozen arena")
        self._nodes.append(node)
        return node

    def _check_children(self, left: Optional[int], right: Optional[int]) -> None:
        size = len(self._nodes)
        for child in (left, right):
            if child is not None and not 0 <= child < size:
                raise IndexError(
                    f"Child index {child} does not refer to an earlier node (arena size {size})"
                )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Optional[Node]:
        """Last entry, or None for an empty arena."""
        return self._nodes[-1] if self._nodes else None

    def children(self, node: Node) -> tuple[Node, Node] | None:
        if node.is_leaf:
            return None
        return self._nodes[node.left], self._nodes[node.right]

    @overload
    def __getitem__(self, index: int) -> Node: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Node, ...]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._nodes[index])
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeArena):
            return NotImplemented
        return self._nodes == other._nodes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "building"
        return f"NodeArena(len={len(self._nodes)}, {state})"


__all__ = [
    "Node",
    "NodeArena",
]
