"""Federated Byzantine agreement systems: nodes and their quorum sets."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Optional

from .quorum_set import QuorumSet
from .sets import NodeId

PublicKey = str


@dataclass(order=True)
class Node:
    """A node identified by its public key, together with its quorum set."""

    public_key: PublicKey
    quorum_set: QuorumSet = field(default_factory=QuorumSet.empty)

    def __hash__(self) -> int:
        return hash((self.public_key, self.quorum_set))

    @classmethod
    def unconfigured(cls, public_key: PublicKey) -> "Node":
        """A node with an empty quorum set; it induces a one-node quorum."""
        return cls(public_key=public_key, quorum_set=QuorumSet.empty())

    def is_quorum_slice(self, own_id: NodeId, node_set: Iterable[NodeId]) -> bool:
        """Whether ``node_set`` contains this node and satisfies its quorum set."""
        nodes = frozenset(node_set)
        return own_id in nodes and self.quorum_set.is_quorum_slice(nodes)

    def _copy(self) -> "Node":
        return Node(self.public_key, self.quorum_set._copy())


def _generic_node_name(node_id: NodeId) -> PublicKey:
    return f"n{node_id}"


@total_ordering
class Fbas:
    """An FBAS: an ordered collection of nodes with unique public keys.

    Node IDs are the positions of the nodes in insertion order. Equality,
    ordering and hashing consider the nodes only.
    """

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self.nodes: list[Node] = []
        self.pk_to_id: dict[PublicKey, NodeId] = {}
        for node in nodes:
            self.add_node(node)

    @classmethod
    def generic_unconfigured(cls, n: int) -> "Fbas":
        """FBAS of ``n`` generically named nodes with empty quorum sets."""
        fbas = cls()
        for _ in range(n):
            fbas.add_generic_node(QuorumSet.empty())
        return fbas

    def add_node(self, node: Node) -> NodeId:
        """Append ``node`` and return its ID; duplicate public keys are rejected."""
        if node.public_key in self.pk_to_id:
            raise ValueError(f"Duplicate public key {node.public_key}")
        node_id = len(self.nodes)
        self.pk_to_id[node.public_key] = node_id
        self.nodes.append(node)
        return node_id

    def add_generic_node(self, quorum_set: QuorumSet) -> NodeId:
        """Append a node with a generic public key such as ``n3``."""
        node_id = len(self.nodes)
        return self.add_node(Node(_generic_node_name(node_id), quorum_set))

    def get_node_id(self, public_key: PublicKey) -> Optional[NodeId]:
        return self.pk_to_id.get(public_key)

    def get_quorum_set(self, node_id: NodeId) -> Optional[QuorumSet]:
        """A copy of the node's quorum set, or ``None`` for an unknown ID."""
        if 0 <= node_id < len(self.nodes):
            return self.nodes[node_id].quorum_set._copy()
        return None

    def swap_quorum_set(self, node_id: NodeId, quorum_set: QuorumSet) -> QuorumSet:
        """Replace the node's quorum set and return the previous one."""
        node = self.nodes[node_id]
        previous, node.quorum_set = node.quorum_set, quorum_set
        return previous

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def all_nodes(self) -> frozenset[NodeId]:
        return frozenset(range(len(self.nodes)))

    def is_quorum(self, node_set: Iterable[NodeId]) -> bool:
        """Whether ``node_set`` is nonempty and a slice for each of its members."""
        nodes = frozenset(node_set)
        return bool(nodes) and all(
            self.nodes[node_id].quorum_set.is_quorum_slice(nodes) for node_id in nodes
        )

    def with_standard_form_quorum_sets(self) -> "Fbas":
        """Copy in which every node is in its own quorum set and all lists are sorted."""
        return Fbas(
            Node(node.public_key, node.quorum_set.to_standard_form(node_id))
            for node_id, node in enumerate(self.nodes)
        )

    def _copy(self) -> "Fbas":
        return Fbas(node._copy() for node in self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fbas):
            return NotImplemented
        return self.nodes == other.nodes

    def __lt__(self, other: "Fbas") -> bool:
        if not isinstance(other, Fbas):
            return NotImplemented
        return self.nodes < other.nodes

    def __hash__(self) -> int:
        return hash(tuple(self.nodes))

    def __repr__(self) -> str:
        return f"Fbas(nodes={self.nodes!r})"