"""Groupings of nodes, e.g. by organization, ISP or country."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from .fbas import Fbas
from .sets import NodeId


@dataclass(order=True)
class Grouping:
    """A named group of nodes."""

    name: str = ""
    validators: list[NodeId] = field(default_factory=list)

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.validators)))


class Groupings:
    """One concrete way of grouping the nodes of an FBAS.

    Each node in a grouping is merged into the grouping's first member, as
    recorded in ``merged_ids``.
    """

    def __init__(self, groupings: Iterable[Grouping], fbas: Fbas) -> None:
        self.groupings: list[Grouping] = list(groupings)
        self.fbas = fbas
        self.merged_ids: list[NodeId] = list(range(fbas.number_of_nodes()))
        self._index_by_member: dict[NodeId, int] = {}
        for index, grouping in enumerate(self.groupings):
            if not grouping.validators:
                continue
            merged_id, *others = grouping.validators
            self._index_by_member[merged_id] = index
            for validator in others:
                self.merged_ids[validator] = merged_id
                self._index_by_member[validator] = index

    def get_by_member(self, node_id: NodeId) -> Optional[Grouping]:
        index = self._index_by_member.get(node_id)
        return None if index is None else self.groupings[index]

    def get_by_name(self, name: str) -> Optional[Grouping]:
        return next((g for g in self.groupings if g.name == name), None)

    def number_of_groupings(self) -> int:
        return len(self.groupings)

    def __len__(self) -> int:
        return len(self.groupings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Groupings):
            return NotImplemented
        return (
            self.groupings == other.groupings
            and self.merged_ids == other.merged_ids
            and self._index_by_member == other._index_by_member
            and self.fbas == other.fbas
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Groupings(groupings={self.groupings!r})"