"""Quorum set configuration of a single node."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from itertools import combinations, islice, product
from typing import Any, Optional

from .sets import NodeId


@dataclass(order=True)
class QuorumSet:
    """A (possibly nested) threshold-based quorum set.

    Comparison follows the field order: threshold, validators, inner quorum sets.
    """

    threshold: int = 0
    validators: list[NodeId] = field(default_factory=list)
    inner_quorum_sets: list["QuorumSet"] = field(default_factory=list)

    def __hash__(self) -> int:
        return hash(
            (self.threshold, tuple(self.validators), tuple(self.inner_quorum_sets))
        )

    @classmethod
    def unsatisfiable(cls) -> "QuorumSet":
        """A quorum set that is never satisfied; marks a node as broken."""
        return cls(threshold=1)

    @classmethod
    def empty(cls) -> "QuorumSet":
        """A quorum set that is always satisfied and induces a one-node quorum."""
        return cls(threshold=0)

    def _copy(self) -> "QuorumSet":
        return QuorumSet(
            threshold=self.threshold,
            validators=list(self.validators),
            inner_quorum_sets=[q._copy() for q in self.inner_quorum_sets],
        )

    def contained_nodes_with_duplicates(self) -> list[NodeId]:
        """All nodes referenced anywhere in this quorum set, in order, with repeats."""
        nodes = list(self.validators)
        for inner in self.inner_quorum_sets:
            nodes.extend(inner.contained_nodes_with_duplicates())
        return nodes

    def contained_nodes(self) -> frozenset[NodeId]:
        """All distinct nodes referenced anywhere in this quorum set."""
        return frozenset(self.contained_nodes_with_duplicates())

    def contains_duplicates(self) -> bool:
        """Whether some node appears more than once."""
        nodes = self.contained_nodes_with_duplicates()
        return len(set(nodes)) < len(nodes)

    def is_satisfiable(self) -> bool:
        return len(self.validators) + len(self.inner_quorum_sets) >= self.threshold

    def is_quorum_slice(self, node_set: frozenset[NodeId]) -> bool:
        """Whether ``node_set`` satisfies this quorum set."""
        threshold = self.threshold
        validator_matches = sum(
            1
            for _ in islice(
                (v for v in self.validators if v in node_set), threshold
            )
        )
        inner_matches = sum(
            1
            for _ in islice(
                (q for q in self.inner_quorum_sets if q.is_quorum_slice(node_set)),
                threshold - validator_matches,
            )
        )
        return validator_matches + inner_matches == threshold

    def to_quorum_slices(self) -> list[frozenset[NodeId]]:
        """Slices such that every valid quorum slice is a superset of one of them.

        The returned slices are not necessarily minimal and do not include the
        node owning the quorum set.
        """
        if self.threshold == 0:
            return [frozenset()]
        return list(self.iter_nonempty_slices())

    def _subslice_groups(self) -> list[list[frozenset[NodeId]]]:
        groups: list[list[frozenset[NodeId]]] = [
            [frozenset((v,))] for v in self.validators
        ]
        groups.extend(q.to_quorum_slices() for q in self.inner_quorum_sets)
        return groups

    def iter_nonempty_slices(self) -> Iterator[frozenset[NodeId]]:
        """Lazily yield slices built from every choice of ``threshold`` members."""
        for group_combination in combinations(self._subslice_groups(), self.threshold):
            for subslice_combination in product(*group_combination):
                yield frozenset().union(*subslice_combination)

    def has_nonintersecting_quorum_slices(
        self,
    ) -> Optional[tuple[frozenset[NodeId], frozenset[NodeId]]]:
        """Return some pair of disjoint quorum slices, or ``None`` if there are none."""
        if self.threshold == 0:
            return frozenset(), frozenset()
        if len(self.contained_nodes()) < len(self.contained_nodes_with_duplicates()):
            return self._nonintersecting_slices_with_duplicates()
        return self._nonintersecting_slices_without_duplicates()

    def _nonintersecting_slices_with_duplicates(
        self,
    ) -> Optional[tuple[frozenset[NodeId], frozenset[NodeId]]]:
        unique_nodes = self.contained_nodes()
        for slice_ in self.iter_nonempty_slices():
            if len(slice_) < len(unique_nodes) // 2:
                rest = unique_nodes - slice_
                if self.is_quorum_slice(rest):
                    return slice_, rest
        return None

    def _nonintersecting_slices_without_duplicates(
        self,
    ) -> Optional[tuple[frozenset[NodeId], frozenset[NodeId]]]:
        goal = 2 * self.threshold
        slices: list[set[NodeId]] = [set(), set()]
        i = 0
        for validator in self.validators[:goal]:
            slices[i % 2].add(validator)
            i += 1
        for inner in self.inner_quorum_sets:
            if i >= goal:
                break
            subslices = inner._nonintersecting_slices_without_duplicates()
            if subslices is not None:
                slices[i % 2] |= subslices[0]
                slices[(i + 1) % 2] |= subslices[1]
                i += 2
            else:
                first = next(inner.iter_nonempty_slices(), None)
                if first is not None:
                    slices[i % 2] |= first
                    i += 1
        if i == goal:
            return frozenset(slices[0]), frozenset(slices[1])
        return None

    def to_standard_form(self, node_id: NodeId) -> "QuorumSet":
        """Copy that includes ``node_id`` and has all validator lists sorted."""
        qset = self._copy()
        qset._ensure_node_included(node_id)
        qset._ensure_sorted()
        return qset

    def _ensure_node_included(self, node_id: NodeId) -> None:
        if node_id not in self.contained_nodes():
            self.validators.append(node_id)
            self.threshold += 1

    def _ensure_sorted(self) -> None:
        self.validators.sort()
        for inner in self.inner_quorum_sets:
            inner._ensure_sorted()
        self.inner_quorum_sets.sort()

    def validator_containing_quorum_sets(self) -> list["QuorumSet"]:
        """The outermost (sub-)quorum sets that directly list validators."""
        if self.validators or not self.inner_quorum_sets:
            return [self._copy()]
        result: list[QuorumSet] = []
        for inner in self.inner_quorum_sets:
            result.extend(inner.validator_containing_quorum_sets())
        return result

    def shrunken(self, shrink_map: Mapping[NodeId, NodeId]) -> "QuorumSet":
        """Re-map node IDs, dropping unmapped validators and unsatisfiable inner sets."""
        validators = sorted(shrink_map[v] for v in self.validators if v in shrink_map)
        inner_quorum_sets = sorted(
            shrunk
            for shrunk in (q.shrunken(shrink_map) for q in self.inner_quorum_sets)
            if shrunk.is_satisfiable()
        )
        return QuorumSet(
            threshold=self.threshold,
            validators=validators,
            inner_quorum_sets=inner_quorum_sets,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serializable form with camelCase keys; empty lists are omitted."""
        data: dict[str, Any] = {"threshold": self.threshold}
        if self.validators:
            data["validators"] = list(self.validators)
        if self.inner_quorum_sets:
            data["innerQuorumSets"] = [q.to_dict() for q in self.inner_quorum_sets]
        return data