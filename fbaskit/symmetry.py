"""Symmetric clusters and symmetric nodes in an FBAS."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from itertools import combinations, product
from typing import Optional

from .fbas import Fbas
from .quorum_set import QuorumSet
from .sets import NodeId, node_set_key

logger = logging.getLogger(__name__)


def is_symmetric_cluster(
    cluster: Iterable[NodeId], fbas: Fbas
) -> Optional[QuorumSet]:
    """Return the common quorum set if ``cluster`` is a symmetric cluster, else ``None``.

    Quorum sets must be in standard form for this to be reliable; see
    ``Fbas.with_standard_form_quorum_sets``.
    """
    members = sorted(set(cluster))
    if not members:
        return None
    first, *others = members
    cluster_quorum_set = fbas.nodes[first].quorum_set
    if cluster_quorum_set.contained_nodes() != frozenset(members):
        return None
    if all(fbas.nodes[node_id].quorum_set == cluster_quorum_set for node_id in others):
        return cluster_quorum_set
    return None


def find_symmetric_clusters_in_node_set(
    nodes: Iterable[NodeId], fbas: Fbas
) -> list[QuorumSet]:
    """Find standard-form quorum sets shared by exactly the nodes they contain."""
    occurrences: dict[QuorumSet, int] = {}
    found: list[QuorumSet] = []
    for node_id in sorted(set(nodes)):
        qset = fbas.nodes[node_id].quorum_set.to_standard_form(node_id)
        contained = qset.contained_nodes()
        if node_id not in contained:
            continue
        count = occurrences.get(qset, 0) + 1
        occurrences[qset] = count
        if count == len(contained):
            found.append(qset)
    return found


@dataclass
class SymmetricNodesMap:
    """Maps each node to the group of nodes it is freely exchangeable with."""

    groups: dict[NodeId, frozenset[NodeId]] = field(default_factory=dict)

    def get(self, node: NodeId) -> Optional[frozenset[NodeId]]:
        return self.groups.get(node)

    def __contains__(self, node: object) -> bool:
        return node in self.groups

    def __len__(self) -> int:
        return len(self.groups)

    def is_non_redundant_next(self, node: NodeId, previous: Iterable[NodeId]) -> bool:
        """Whether adding ``node`` next respects the one allowed ordering of its group."""
        symmetric_nodes = self.groups.get(node)
        if symmetric_nodes is None:
            return True
        remaining = symmetric_nodes - frozenset(previous)
        return bool(remaining) and min(remaining) == node

    def expand_sets(
        self, node_sets: Iterable[Iterable[NodeId]]
    ) -> list[frozenset[NodeId]]:
        """Expand each set into all variants obtained by swapping symmetric nodes."""
        logger.debug("Expanding symmetric nodes...")
        expanded: list[frozenset[NodeId]] = []
        for raw_set in node_sets:
            unexpanded = frozenset(raw_set)
            matching = list(
                dict.fromkeys(
                    self.groups[node]
                    for node in sorted(unexpanded)
                    if node in self.groups
                )
            )
            if matching:
                expanded.extend(expand_symmetric_nodes_in_set(unexpanded, matching))
            else:
                expanded.append(unexpanded)
        expanded.sort(key=node_set_key)
        return expanded


def find_symmetric_nodes_in_node_set(
    nodes: Iterable[NodeId], fbas: Fbas
) -> SymmetricNodesMap:
    """Find nodes that are always included in the same validator-containing quorum set.

    Not all exchangeable nodes are found; in a Stellar-like FBAS the nodes of
    one organization typically are.
    """
    node_ids = frozenset(nodes)
    referencing: list[set[QuorumSet]] = [set() for _ in range(fbas.number_of_nodes())]

    standard_qsets = dict.fromkeys(
        fbas.nodes[node_id].quorum_set.to_standard_form(node_id)
        for node_id in sorted(node_ids)
    )
    vc_qsets = dict.fromkeys(
        vc_qset
        for qset in standard_qsets
        for vc_qset in qset.validator_containing_quorum_sets()
    )
    for vc_qset in vc_qsets:
        for node_id in vc_qset.contained_nodes():
            referencing[node_id].add(vc_qset)

    result: dict[NodeId, frozenset[NodeId]] = {}
    for qsets in referencing:
        if len(qsets) != 1:
            continue
        (qset,) = qsets
        contained = qset.contained_nodes()
        if not all(len(referencing[node_id]) == 1 for node_id in contained):
            continue
        # ensure that we don't count nodes that don't exist
        symmetric_nodes = contained & node_ids
        for node_id in symmetric_nodes:
            result[node_id] = symmetric_nodes
    return SymmetricNodesMap(result)


def expand_symmetric_nodes_in_set(
    unexpanded_set: Iterable[NodeId],
    matching_symmetric_nodes: Iterable[Iterable[NodeId]],
) -> list[frozenset[NodeId]]:
    """All sets obtained by replacing members of each symmetric group with equally many others."""
    unexpanded = frozenset(unexpanded_set)
    groups = [frozenset(g) for g in matching_symmetric_nodes]
    base = unexpanded.difference(*groups)
    choices = [
        list(combinations(sorted(group), len(unexpanded & group))) for group in groups
    ]
    return [
        base.union(*parts)
        for parts in product(*choices)
    ]