"""OR-combination of merge/drop predicates."""

from __future__ import annotations

from typing import Callable, Iterable

from graph_sync.graph.protocols import SyncableGraph

Predicate = Callable[[str, SyncableGraph, SyncableGraph], bool]


def decide(
    predicates: Iterable[Predicate],
    key: str,
    source: SyncableGraph,
    target: SyncableGraph,
) -> bool:
    """Return ``True`` if any predicate accepts element *key*.

    Predicates are called in order with ``(key, source, target)`` and
    evaluation stops at the first truthy result.  An empty collection
    yields ``False``.  Exceptions raised by a predicate propagate.
    """
    return any(predicate(key, source, target) for predicate in predicates)
