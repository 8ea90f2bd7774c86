"""Helpers for working with sets of node IDs.

Node sets are represented as ``frozenset`` objects of integer node IDs. Their
canonical ordering compares the ascending sequences of contained IDs
lexicographically.
"""

from __future__ import annotations

from collections.abc import Iterable

NodeId = int
NodeIdSet = frozenset


def node_set(*args: int) -> frozenset[int]:
    """Create a node set from the given node IDs."""
    return frozenset(args)


def node_set_key(node_set: Iterable[int]) -> tuple[int, ...]:
    """Sort key giving the canonical ordering of node sets."""
    return tuple(sorted(node_set))


def sorted_node_sets(node_sets: Iterable[Iterable[int]]) -> list[frozenset[int]]:
    """Return the given node sets as frozensets in canonical order."""
    return sorted((frozenset(s) for s in node_sets), key=node_set_key)