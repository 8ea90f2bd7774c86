"""Shrinking: re-mapping node IDs into a smaller, dense ID space."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from .fbas import Fbas, Node
from .groupings import Grouping, Groupings
from .sets import NodeId


def shrink_set(
    node_set: Iterable[NodeId], shrink_map: Mapping[NodeId, NodeId]
) -> frozenset[NodeId]:
    """Map every ID through ``shrink_map``; unmapped IDs raise ``KeyError``."""
    return frozenset(shrink_map[node_id] for node_id in node_set)


def shrink_sets(
    node_sets: Iterable[Iterable[NodeId]], shrink_map: Mapping[NodeId, NodeId]
) -> list[frozenset[NodeId]]:
    return [shrink_set(s, shrink_map) for s in node_sets]


def unshrink_set(
    node_set: Iterable[NodeId], unshrink_table: Sequence[NodeId]
) -> frozenset[NodeId]:
    """Map shrunken IDs back to their original IDs."""
    return frozenset(unshrink_table[node_id] for node_id in node_set)


def unshrink_sets(
    node_sets: Iterable[Iterable[NodeId]], unshrink_table: Sequence[NodeId]
) -> list[frozenset[NodeId]]:
    return [unshrink_set(s, unshrink_table) for s in node_sets]


class ShrinkManager:
    """Translates between original node IDs and a dense shrunken ID space.

    Kept IDs are assigned new IDs in ascending order of their original IDs.
    """

    def __init__(self, ids_to_keep: Iterable[NodeId]) -> None:
        self._unshrink_table: list[NodeId] = sorted(set(ids_to_keep))
        self._shrink_map: dict[NodeId, NodeId] = {
            old: new for new, old in enumerate(self._unshrink_table)
        }

    @classmethod
    def from_tables(
        cls, unshrink_table: Iterable[NodeId], shrink_map: Mapping[NodeId, NodeId]
    ) -> "ShrinkManager":
        """Build a manager from explicit translation tables."""
        manager = cls(())
        manager._unshrink_table = list(unshrink_table)
        manager._shrink_map = dict(shrink_map)
        return manager

    @property
    def unshrink_table(self) -> list[NodeId]:
        return list(self._unshrink_table)

    @property
    def shrink_map(self) -> dict[NodeId, NodeId]:
        return dict(self._shrink_map)

    def shrink_set(self, node_set: Iterable[NodeId]) -> frozenset[NodeId]:
        return shrink_set(node_set, self._shrink_map)

    def shrink_sets(
        self, node_sets: Iterable[Iterable[NodeId]]
    ) -> list[frozenset[NodeId]]:
        return shrink_sets(node_sets, self._shrink_map)

    def unshrink_set(self, node_set: Iterable[NodeId]) -> frozenset[NodeId]:
        return unshrink_set(node_set, self._unshrink_table)

    def unshrink_sets(
        self, node_sets: Iterable[Iterable[NodeId]]
    ) -> list[frozenset[NodeId]]:
        return unshrink_sets(node_sets, self._unshrink_table)

    def reshrink_sets(
        self,
        node_sets: Iterable[Iterable[NodeId]],
        old_shrink_manager: "ShrinkManager",
    ) -> list[frozenset[NodeId]]:
        """Re-encode sets from ``old_shrink_manager``'s ID space into this one."""
        reshrink_map = {
            current_id: self._shrink_map[original_id]
            for current_id, original_id in enumerate(old_shrink_manager._unshrink_table)
            if original_id in self._shrink_map
        }
        return shrink_sets(node_sets, reshrink_map)

    def __repr__(self) -> str:
        return f"ShrinkManager(unshrink_table={self._unshrink_table!r})"


def shrink_fbas(
    fbas: Fbas, ids_to_keep: Iterable[NodeId]
) -> tuple[Fbas, ShrinkManager]:
    """Restrict ``fbas`` to the given nodes, re-numbering them densely."""
    manager = ShrinkManager(ids_to_keep)
    unknown = [
        node_id
        for node_id in manager.unshrink_table
        if not 0 <= node_id < fbas.number_of_nodes()
    ]
    if unknown:
        raise ValueError(f"Node IDs not in FBAS: {unknown}")
    shrink_map = manager.shrink_map
    shrunken = Fbas(
        Node(
            fbas.nodes[old_id].public_key,
            fbas.nodes[old_id].quorum_set.shrunken(shrink_map),
        )
        for old_id in manager.unshrink_table
    )
    return shrunken, manager


def shrink_grouping(grouping: Grouping, shrink_map: Mapping[NodeId, NodeId]) -> Grouping:
    """Re-map a grouping's members, dropping those not in ``shrink_map``."""
    validators = sorted(shrink_map[v] for v in grouping.validators if v in shrink_map)
    return Grouping(name=grouping.name, validators=validators)


def shrink_groupings(
    groupings: Groupings, shrink_manager: ShrinkManager, shrunken_fbas: Fbas
) -> Groupings:
    shrink_map = shrink_manager.shrink_map
    return Groupings(
        (shrink_grouping(g, shrink_map) for g in groupings.groupings), shrunken_fbas
    )