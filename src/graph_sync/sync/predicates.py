"""Built-in predicates and the name registry used by config profiles.

Every predicate has the signature ``(key, source, target) -> bool`` and
only reads the graphs it is given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from graph_sync.graph.protocols import SyncableGraph

    from .decision import Predicate

ElementKind = Literal["node", "edge"]


def always(key: str, source: SyncableGraph, target: SyncableGraph) -> bool:
    return True


def never(key: str, source: SyncableGraph, target: SyncableGraph) -> bool:
    return False


def node_missing_in_target(
    key: str, source: SyncableGraph, target: SyncableGraph
) -> bool:
    return not target.has_node(key)


def node_present_in_target(
    key: str, source: SyncableGraph, target: SyncableGraph
) -> bool:
    return target.has_node(key)


def edge_missing_in_target(
    key: str, source: SyncableGraph, target: SyncableGraph
) -> bool:
    return not target.has_edge(key)


def edge_present_in_target(
    key: str, source: SyncableGraph, target: SyncableGraph
) -> bool:
    return target.has_edge(key)


_REGISTRY: dict[ElementKind, dict[str, Predicate]] = {
    "node": {
        "always": always,
        "never": never,
        "missing-in-target": node_missing_in_target,
        "present-in-target": node_present_in_target,
    },
    "edge": {
        "always": always,
        "never": never,
        "missing-in-target": edge_missing_in_target,
        "present-in-target": edge_present_in_target,
    },
}


def predicate_names() -> list[str]:
    """Return the names accepted by ``resolve_predicate``."""
    return sorted(_REGISTRY["node"])


def resolve_predicate(name: str, kind: ElementKind) -> Predicate:
    """Look up the built-in predicate *name* for element *kind*.

    Raises:
        ValueError: If *name* is not a registered predicate.
    """
    try:
        return _REGISTRY[kind][name]
    except KeyError:
        valid = ", ".join(predicate_names())
        raise ValueError(
            f"Unknown {kind} predicate '{name}'. Valid names: {valid}"
        ) from None
