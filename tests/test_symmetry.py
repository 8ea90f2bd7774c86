import pytest

from fbaskit.fbas import Fbas
from fbaskit.quorum_set import QuorumSet
from fbaskit.symmetry import (
    SymmetricNodesMap,
    expand_symmetric_nodes_in_set,
    find_symmetric_clusters_in_node_set,
    find_symmetric_nodes_in_node_set,
    is_symmetric_cluster,
)
from fbaskit.sets import node_set


def flat(validators, threshold):
    return QuorumSet(threshold=threshold, validators=list(validators))


def make_fbas(qsets):
    fbas = Fbas()
    for qset in qsets:
        fbas.add_generic_node(qset)
    return fbas


def symmetric_qset():
    return QuorumSet(
        threshold=2,
        inner_quorum_sets=[
            flat([0, 1, 2], 2),
            flat([3, 4, 5], 2),
            flat([6, 7, 8], 2),
        ],
    )


def symmetric_fbas():
    return make_fbas(symmetric_qset() for _ in range(9))


def test_symmetric_clusters_in_split_fbas():
    fbas = make_fbas([flat([0, 1], 2), flat([0, 1], 2), flat([3], 1), flat([2], 1)])
    actual = find_symmetric_clusters_in_node_set(fbas.all_nodes(), fbas)
    assert actual == [flat([0, 1], 2), flat([2, 3], 2)]


def test_symmetric_cluster_in_correct_trivial_like_fbas():
    fbas = make_fbas([flat([0, 1, 2], 2) for _ in range(3)])
    actual = find_symmetric_clusters_in_node_set(fbas.all_nodes(), fbas)
    assert actual == [flat([0, 1, 2], 2)]


def test_mobilecoinish_fbas_forms_one_cluster():
    fbas = make_fbas([flat([1], 1), flat([0], 1)])
    actual = find_symmetric_clusters_in_node_set(fbas.all_nodes(), fbas)
    assert actual == [flat([0, 1], 2)]


def test_symmetric_cluster_in_symmetric_cluster():
    fbas = make_fbas([flat([0, 1], 2), flat([0, 1], 2)])
    assert is_symmetric_cluster(node_set(0, 1), fbas) == flat([0, 1], 2)


def test_symmetric_cluster_in_weird_cluster():
    fbas = make_fbas([flat([1], 1), flat([0, 1], 2)])
    assert is_symmetric_cluster(node_set(0, 1), fbas) is None


def test_symmetric_cluster_in_weird_cluster_made_standard():
    fbas = make_fbas([flat([1], 1), flat([0, 1], 2)])
    fbas = fbas.with_standard_form_quorum_sets()
    assert is_symmetric_cluster(node_set(0, 1), fbas) == flat([0, 1], 2)


def test_empty_cluster_is_not_symmetric():
    fbas = make_fbas([flat([0, 1], 2), flat([0, 1], 2)])
    assert is_symmetric_cluster(node_set(), fbas) is None


def test_symmetric_nodes_in_symmetric_cluster():
    fbas = symmetric_fbas()
    result = find_symmetric_nodes_in_node_set(fbas.all_nodes(), fbas)
    assert result.get(0) == node_set(0, 1, 2)
    assert result.get(7) == node_set(6, 7, 8)


def test_symmetric_nodes_in_not_quite_symmetric_cluster():
    fbas = symmetric_fbas()
    fbas.nodes[8].quorum_set.inner_quorum_sets[0].validators = [0, 1]
    result = find_symmetric_nodes_in_node_set(fbas.all_nodes(), fbas)
    assert result.get(0) is None


def test_symmetric_nodes_restricted_to_given_nodes():
    fbas = symmetric_fbas()
    result = find_symmetric_nodes_in_node_set(node_set(0, 1, 3, 4, 5), fbas)
    assert result.get(0) == node_set(0, 1)
    assert 2 not in result


def test_expand_symmetric_nodes_in_simple_set():
    actual = expand_symmetric_nodes_in_set(node_set(0, 1, 2, 4), [node_set(2, 3)])
    assert actual == [node_set(0, 1, 2, 4), node_set(0, 1, 3, 4)]


def test_expand_symmetric_nodes_in_complex_set():
    actual = expand_symmetric_nodes_in_set(
        node_set(0, 1, 2, 4, 5), [node_set(2, 3), node_set(4, 5, 6)]
    )
    assert actual == [
        node_set(0, 1, 2, 4, 5),
        node_set(0, 1, 2, 4, 6),
        node_set(0, 1, 2, 5, 6),
        node_set(0, 1, 3, 4, 5),
        node_set(0, 1, 3, 4, 6),
        node_set(0, 1, 3, 5, 6),
    ]


@pytest.mark.parametrize(
    "node, previous, expected",
    [
        (0, node_set(), True),
        (1, node_set(), False),
        (1, node_set(0), True),
        (2, node_set(0), False),
        (0, node_set(0, 1, 2), False),
        (5, node_set(), True),
    ],
)
def test_is_non_redundant_next(node, previous, expected):
    group = node_set(0, 1, 2)
    symmetric = SymmetricNodesMap({0: group, 1: group, 2: group})
    assert symmetric.is_non_redundant_next(node, previous) is expected


def test_expand_sets_expands_and_sorts():
    fbas = symmetric_fbas()
    symmetric = find_symmetric_nodes_in_node_set(fbas.all_nodes(), fbas)
    actual = symmetric.expand_sets([node_set(3, 0)])
    assert actual == [
        node_set(0, 3),
        node_set(0, 4),
        node_set(0, 5),
        node_set(1, 3),
        node_set(1, 4),
        node_set(1, 5),
        node_set(2, 3),
        node_set(2, 4),
        node_set(2, 5),
    ]


def test_expand_sets_keeps_sets_without_symmetric_nodes():
    symmetric = SymmetricNodesMap({0: node_set(0, 1), 1: node_set(0, 1)})
    actual = symmetric.expand_sets([node_set(5, 6), node_set(0)])
    assert actual == [node_set(0), node_set(1), node_set(5, 6)]