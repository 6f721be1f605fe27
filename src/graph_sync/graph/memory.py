"""In-process evented graph backed by ``networkx``.

``EventedGraph`` stores nodes and keyed edges in a
``networkx.MultiDiGraph`` and emits a ``GraphEvent`` for every mutation.
It satisfies ``SyncableGraph`` and is what callers and tests hand to the
sync engine when no other graph store is involved.

Semantics follow graphology:

- nodes and edges iterate in insertion order;
- edge keys are unique per graph and endpoints are fixed at creation;
- ``merge_*`` methods upsert, overlaying attributes without clearing
  attributes absent from the given mapping;
- dropping a node first drops its incident edges.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

import networkx as nx

from .errors import NotFoundGraphError, UsageGraphError
from .events import EventRegistry, GraphEvent, Listener


class EventedGraph:
    """Directed multigraph with keyed edges and mutation events.

    Args:
        attributes: Optional initial graph-level attributes.
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self._graph = nx.MultiDiGraph()
        self._graph.graph.update(attributes or {})
        # Edge key -> (source, target); dict order is insertion order
        self._edges: dict[str, tuple[str, str]] = {}
        self._events = EventRegistry()

    def __repr__(self) -> str:
        return f"EventedGraph(order={self.order}, size={self.size})"

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def order(self) -> int:
        """Number of nodes."""
        return self._graph.number_of_nodes()

    @property
    def size(self) -> int:
        """Number of edges."""
        return len(self._edges)

    def has_node(self, key: str) -> bool:
        return self._graph.has_node(key)

    def has_edge(self, key: str) -> bool:
        return key in self._edges

    def nodes(self) -> list[str]:
        return list(self._graph.nodes)

    def edges(self) -> list[str]:
        return list(self._edges)

    def iter_nodes(self) -> Iterator[tuple[str, dict[str, Any]]]:
        for key, attributes in self._graph.nodes(data=True):
            yield key, dict(attributes)

    def iter_edges(self) -> Iterator[tuple[str, dict[str, Any], str, str]]:
        for key, (source, target) in self._edges.items():
            yield key, dict(self._edge_data(key, source, target)), source, target

    def get_attributes(self) -> dict[str, Any]:
        return dict(self._graph.graph)

    def get_node_attributes(self, key: str) -> dict[str, Any]:
        self._require_node(key)
        return dict(self._graph.nodes[key])

    def get_edge_attributes(self, key: str) -> dict[str, Any]:
        source, target = self.extremities(key)
        return dict(self._edge_data(key, source, target))

    def extremities(self, key: str) -> tuple[str, str]:
        """Return ``(source, target)`` of edge *key*."""
        try:
            return self._edges[key]
        except KeyError:
            raise NotFoundGraphError(
                f"Edge '{key}' does not exist in the graph"
            ) from None

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def merge_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._graph.graph.update(attributes)
        self._events.emit(
            GraphEvent.ATTRIBUTES_UPDATED,
            {
                "type": "merge",
                "attributes": dict(self._graph.graph),
                "data": dict(attributes),
            },
        )

    def add_node(
        self, key: str, attributes: Mapping[str, Any] | None = None
    ) -> None:
        if self._graph.has_node(key):
            raise UsageGraphError(
                f"Node '{key}' already exists in the graph"
            )
        self._insert_node(key, attributes or {})

    def merge_node(self, key: str, attributes: Mapping[str, Any]) -> None:
        if not self._graph.has_node(key):
            self._insert_node(key, attributes)
            return

        node_attributes = self._graph.nodes[key]
        node_attributes.update(attributes)
        self._events.emit(
            GraphEvent.NODE_ATTRIBUTES_UPDATED,
            {
                "key": key,
                "type": "merge",
                "attributes": dict(node_attributes),
                "data": dict(attributes),
            },
        )

    def drop_node(self, key: str) -> None:
        self._require_node(key)

        # A self-loop shows up as both an out-edge and an in-edge
        incident = dict.fromkeys(
            edge_key
            for edges in (
                self._graph.out_edges(key, keys=True),
                self._graph.in_edges(key, keys=True),
            )
            for _, _, edge_key in edges
        )
        for edge_key in incident:
            self.drop_edge(edge_key)

        attributes = dict(self._graph.nodes[key])
        self._graph.remove_node(key)
        self._events.emit(
            GraphEvent.NODE_DROPPED, {"key": key, "attributes": attributes}
        )

    def add_edge_with_key(
        self,
        key: str,
        source: str,
        target: str,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        if key in self._edges:
            raise UsageGraphError(
                f"Edge '{key}' already exists in the graph"
            )
        self._require_node(source)
        self._require_node(target)
        self._insert_edge(key, source, target, attributes or {})

    def merge_edge_with_key(
        self,
        key: str,
        source: str,
        target: str,
        attributes: Mapping[str, Any],
    ) -> None:
        existing = self._edges.get(key)
        if existing is None:
            for endpoint in (source, target):
                if not self._graph.has_node(endpoint):
                    self._insert_node(endpoint, {})
            self._insert_edge(key, source, target, attributes)
            return

        if existing != (source, target):
            raise UsageGraphError(
                f"Edge '{key}' already connects '{existing[0]}' -> "
                f"'{existing[1]}', not '{source}' -> '{target}'"
            )

        edge_attributes = self._edge_data(key, source, target)
        edge_attributes.update(attributes)
        self._events.emit(
            GraphEvent.EDGE_ATTRIBUTES_UPDATED,
            {
                "key": key,
                "type": "merge",
                "attributes": dict(edge_attributes),
                "data": dict(attributes),
            },
        )

    def drop_edge(self, key: str) -> None:
        source, target = self.extremities(key)
        attributes = dict(self._edge_data(key, source, target))
        self._graph.remove_edge(source, target, key=key)
        del self._edges[key]
        self._events.emit(
            GraphEvent.EDGE_DROPPED,
            {
                "key": key,
                "source": source,
                "target": target,
                "attributes": attributes,
            },
        )

    def clear_edges(self) -> None:
        self._graph.clear_edges()
        self._edges.clear()
        self._events.emit(GraphEvent.EDGES_CLEARED, {})

    def clear(self) -> None:
        self._graph.clear_edges()
        self._graph.remove_nodes_from(list(self._graph.nodes))
        self._edges.clear()
        self._events.emit(GraphEvent.CLEARED, {})

    # ------------------------------------------------------------------
    # Event side
    # ------------------------------------------------------------------

    def listeners(self, event: str) -> list[Listener]:
        return self._events.listeners(event)

    def on(self, event: str, listener: Listener) -> None:
        self._events.on(event, listener)

    def off(self, event: str, listener: Listener) -> None:
        self._events.off(event, listener)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_node(self, key: str) -> None:
        if not self._graph.has_node(key):
            raise NotFoundGraphError(
                f"Node '{key}' does not exist in the graph"
            )

    def _edge_data(self, key: str, source: str, target: str) -> dict:
        return self._graph.edges[source, target, key]

    def _insert_node(self, key: str, attributes: Mapping[str, Any]) -> None:
        self._graph.add_node(key)
        self._graph.nodes[key].update(attributes)
        self._events.emit(
            GraphEvent.NODE_ADDED,
            {"key": key, "attributes": dict(attributes)},
        )

    def _insert_edge(
        self,
        key: str,
        source: str,
        target: str,
        attributes: Mapping[str, Any],
    ) -> None:
        self._graph.add_edge(source, target, key=key)
        self._edge_data(key, source, target).update(attributes)
        self._edges[key] = (source, target)
        self._events.emit(
            GraphEvent.EDGE_ADDED,
            {
                "key": key,
                "source": source,
                "target": target,
                "attributes": dict(attributes),
            },
        )
