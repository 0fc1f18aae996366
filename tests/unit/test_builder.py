"""
Tree Builder Unit Tests
Tests for hashtree/merkle/builder.py

Required behaviour:
1. Padding correctness - odd levels duplicate the last node, at every level
2. Node count law - nodes(n) = p + nodes(p / 2), p = n + n % 2
3. Arena layout - leaves first, root last, children precede parents
4. Single leaf - root equals leaf
5. Empty input - empty arena
"""
import logging

import pytest

from hashtree.crypto.hashing import combine
from hashtree.merkle.builder import (
    build_tree,
    compute_num_nodes,
    compute_tree_depth,
    hash_blocks,
)


def _leaves(strategy, n):
    return [strategy.hash(f"leaf{i}".encode()) for i in range(n)]


class TestEmptyAndSingle:
    """Degenerate inputs."""

    def test_empty_input_empty_arena(self, sha256_strategy):
        arena = build_tree([], sha256_strategy)

        assert len(arena) == 0
        assert arena.root is None
        assert arena.frozen

    def test_single_leaf_is_root(self, sha256_strategy):
        leaf = sha256_strategy.hash(b"single leaf")

        arena = build_tree([leaf], sha256_strategy)

        assert len(arena) == 1
        assert arena.root.hash == leaf
        assert arena.root.is_leaf

    def test_single_leaf_no_combine_calls(self, counting_strategy):
        build_tree([b"\x00" * 32], counting_strategy)

        assert counting_strategy.calls == []


class TestPaddingCorrectness:
    """Tests for odd-number padding behavior."""

    def test_padding_rule_three_leaves(self, sha256_strategy):
        """Three leaves use duplicate-last padding."""
        a, b, c = _leaves(sha256_strategy, 3)

        # Level 0: [a, b, c, c]  (c duplicated)
        # Level 1: [parent(a,b), parent(c,c)]
        # Level 2: [parent(parent(a,b), parent(c,c))]
        ab = combine(sha256_strategy, a, b)
        cc = combine(sha256_strategy, c, c)
        expected_root = combine(sha256_strategy, ab, cc)

        arena = build_tree([a, b, c], sha256_strategy)

        assert arena.root.hash == expected_root
        assert len(arena) == 7

    def test_three_leaves_layout(self, sha256_strategy):
        """Duplicate sits right after the leaves and feeds the second parent."""
        arena = build_tree(_leaves(sha256_strategy, 3), sha256_strategy)

        dup = arena[3]
        assert dup.is_leaf and dup.is_padding
        assert dup.duplicate_of == 2
        assert dup.hash == arena[2].hash

        assert (arena[4].left, arena[4].right) == (0, 1)
        assert (arena[5].left, arena[5].right) == (2, 3)
        assert (arena[6].left, arena[6].right) == (4, 5)

    def test_padding_rule_five_leaves(self, sha256_strategy):
        """Five leaves use duplicate-last padding at multiple levels."""
        a, b, c, d, e = _leaves(sha256_strategy, 5)

        # Level 0: [a, b, c, d, e, e]  (e duplicated)
        # Level 1: [ab, cd, ee]
        # Level 2: [ab, cd, ee, ee]  (ee duplicated)
        # Level 3: [abcd, eeee]
        # Level 4: [root]
        ab = combine(sha256_strategy, a, b)
        cd = combine(sha256_strategy, c, d)
        ee = combine(sha256_strategy, e, e)
        abcd = combine(sha256_strategy, ab, cd)
        eeee = combine(sha256_strategy, ee, ee)
        expected_root = combine(sha256_strategy, abcd, eeee)

        arena = build_tree([a, b, c, d, e], sha256_strategy)

        assert arena.root.hash == expected_root
        padding = [n for n in arena if n.is_padding]
        assert len(padding) == 2
        # The second duplicate is a parent-level node and keeps its children
        assert not padding[1].is_leaf

    def test_even_leaves_no_padding_needed(self, sha256_strategy):
        a, b, c, d = _leaves(sha256_strategy, 4)
        expected_root = combine(
            sha256_strategy,
            combine(sha256_strategy, a, b),
            combine(sha256_strategy, c, d),
        )

        arena = build_tree([a, b, c, d], sha256_strategy)

        assert arena.root.hash == expected_root
        assert not any(n.is_padding for n in arena)
        assert len(arena) == 7

    def test_duplicate_is_not_rehashed(self, counting_strategy):
        """Only combine calls hit the strategy: one per parent."""
        leaves = [bytes([i]) * 32 for i in range(3)]

        arena = build_tree(leaves, counting_strategy)

        parents = [n for n in arena if not n.is_leaf and not n.is_padding]
        assert len(counting_strategy.calls) == len(parents) == 3


class TestArenaInvariants:
    """Layout invariants for a range of sizes."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7, 8, 9, 17, 33, 100])
    def test_layout(self, sha256_strategy, n):
        leaves = _leaves(sha256_strategy, n)

        arena = build_tree(leaves, sha256_strategy)

        assert [node.hash for node in arena[:n]] == leaves
        assert all(node.index == i for i, node in enumerate(arena))
        for node in arena:
            if node.is_leaf:
                continue
            assert node.left < node.index and node.right < node.index
            if not node.is_padding:
                assert node.hash == combine(
                    sha256_strategy, arena[node.left].hash, arena[node.right].hash
                )
        assert len(arena) == compute_num_nodes(n)

    def test_accepts_lazy_iterator(self, sha256_strategy):
        blocks = iter([b"a", b"b", b"c"])

        arena = build_tree(hash_blocks(blocks, sha256_strategy), sha256_strategy)

        assert len(arena) == 7
        assert arena[0].hash == sha256_strategy.hash(b"a")

    def test_deep_tree_does_not_recurse(self, sha256_strategy):
        """Large inputs build without hitting the recursion limit."""
        leaves = [i.to_bytes(4, "big") for i in range(5000)]

        arena = build_tree(leaves, sha256_strategy)

        assert len(arena) == compute_num_nodes(5000)


class TestCounters:
    """Tests for compute_num_nodes and compute_tree_depth."""

    @pytest.mark.parametrize(
        "n,expected",
        [(0, 0), (1, 1), (2, 3), (3, 7), (4, 7), (5, 13), (6, 13), (7, 15), (8, 15)],
    )
    def test_num_nodes(self, n, expected):
        assert compute_num_nodes(n) == expected

    def test_num_nodes_negative_rejected(self):
        with pytest.raises(ValueError):
            compute_num_nodes(-1)

    @pytest.mark.parametrize(
        "n,expected",
        [(0, 0), (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5)],
    )
    def test_tree_depth(self, n, expected):
        assert compute_tree_depth(n) == expected


class TestLogging:
    """The builder reports a summary at INFO."""

    def test_info_summary(self, sha256_strategy, caplog):
        with caplog.at_level(logging.INFO, logger="hashtree.merkle.builder"):
            build_tree(_leaves(sha256_strategy, 3), sha256_strategy)

        assert "3 blocks, 7 nodes, depth 3 (sha256)" in caplog.text
