# fbaskit

Building blocks for analysing federated Byzantine agreement systems (FBASs),
such as the Stellar network. Nodes are identified by integer node IDs (their
position in the FBAS), and node sets are plain `frozenset`s of those IDs.

## Modules

- `fbaskit.sets`: helpers for node sets. `node_set(*ids)` builds one,
  `node_set_key` gives the canonical ordering (ascending member IDs compared
  lexicographically), and `sorted_node_sets` returns sets in that order.
- `fbaskit.quorum_set`: `QuorumSet`, a nested threshold structure with
  `threshold`, `validators` and `inner_quorum_sets`.
  - `QuorumSet.empty()` (threshold 0, always satisfied) and
    `QuorumSet.unsatisfiable()` (threshold 1, no members).
  - `is_quorum_slice(node_set)`, `is_satisfiable()`.
  - `contained_nodes()`, `contained_nodes_with_duplicates()`,
    `contains_duplicates()`.
  - `to_quorum_slices()` and the lazy `iter_nonempty_slices()`; the slices are
    not necessarily minimal.
  - `has_nonintersecting_quorum_slices()` returns two disjoint slices or `None`.
  - `to_standard_form(node_id)` adds the node (raising the threshold by one)
    if it is missing and sorts all lists.
  - `validator_containing_quorum_sets()`, `shrunken(shrink_map)` and
    `to_dict()` (camelCase keys, empty lists left out).
- `fbaskit.fbas`: `Node` and `Fbas`. `Fbas.add_node` rejects duplicate public
  keys with `ValueError`; `add_generic_node` names nodes `n0`, `n1`, ...
  There are also `generic_unconfigured(n)`, `get_node_id`, `get_quorum_set`,
  `swap_quorum_set`, `number_of_nodes`, `all_nodes`, `is_quorum` and
  `with_standard_form_quorum_sets`.
- `fbaskit.groupings`: `Grouping` (a name and member IDs) and `Groupings`,
  which records for every node the ID it is merged into (the first member of
  its grouping) in `merged_ids`, with `get_by_member`, `get_by_name` and
  `number_of_groupings`.
- `fbaskit.shrinking`: `ShrinkManager` maps kept node IDs onto a dense ID
  space in ascending order and back (`shrink_set(s)`, `unshrink_set(s)`,
  `reshrink_sets`); `ShrinkManager.from_tables` builds one from explicit
  tables. The free functions `shrink_set`, `shrink_sets`, `unshrink_set`,
  `unshrink_sets`, `shrink_fbas`, `shrink_grouping` and `shrink_groupings` do
  the same for sets, whole FBASs and groupings. Shrinking a set with an ID
  that is not in the map raises `KeyError`; `shrink_fbas` raises `ValueError`
  for IDs that are not in the FBAS.
- `fbaskit.symmetry`: `is_symmetric_cluster`,
  `find_symmetric_clusters_in_node_set`, `find_symmetric_nodes_in_node_set`
  (returning a `SymmetricNodesMap` with `is_non_redundant_next` and
  `expand_sets`) and `expand_symmetric_nodes_in_set`.
- `fbaskit.timing`: `timed(operation, *args, **kwargs)` returns the result
  and a `timedelta`, `timed_secs` the result and seconds as a float, and
  `Stopwatch` measures a `with` block.

## Example

```python
from fbaskit.fbas import Fbas
from fbaskit.quorum_set import QuorumSet
from fbaskit.sets import node_set
from fbaskit.symmetry import find_symmetric_clusters_in_node_set

fbas = Fbas()
qset = QuorumSet(threshold=2, validators=[0, 1, 2])
for _ in range(3):
    fbas.add_generic_node(qset)

assert fbas.is_quorum(node_set(0, 1))
assert not fbas.is_quorum(node_set(0))
assert find_symmetric_clusters_in_node_set(fbas.all_nodes(), fbas) == [qset]
```

Measuring a call:

```python
from fbaskit.timing import timed_secs

value, seconds = timed_secs(sum, range(1000))
```

## What it does not do

fbaskit is a library of core types only. It does not read or write FBAS
descriptions in JSON, does not enumerate minimal quorums, blocking sets or
splitting sets, does not check quorum intersection, does not simulate quorum
set configuration, and has no command-line tools.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`.