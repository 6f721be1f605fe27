"""Shared pytest fixtures for graph-sync tests."""

from __future__ import annotations

from typing import Any

import pytest

from graph_sync.graph import EventedGraph


class EventRecorder:
    """Listener that records every payload it receives, tagged by event."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def listener_for(self, event: str):
        def _listener(payload: dict[str, Any]) -> None:
            self.calls.append((event, payload))

        return _listener

    def keys(self, event: str) -> list[str]:
        return [p.get("key") for e, p in self.calls if e == event]


def build_graph(
    nodes: dict[str, dict[str, Any]] | None = None,
    edges: list[tuple[str, str, str, dict[str, Any]]] | None = None,
    attributes: dict[str, Any] | None = None,
) -> EventedGraph:
    """Build an ``EventedGraph`` from plain data.

    *edges* holds ``(key, source, target, attributes)`` tuples; endpoints
    must be listed in *nodes*.
    """
    graph = EventedGraph(attributes)
    for key, attrs in (nodes or {}).items():
        graph.add_node(key, attrs)
    for key, source, target, attrs in edges or []:
        graph.add_edge_with_key(key, source, target, attrs)
    return graph


class FlakyGraph(EventedGraph):
    """EventedGraph whose ``on`` or ``off`` can be made to raise once."""

    def __init__(self, attributes: dict[str, Any] | None = None) -> None:
        super().__init__(attributes)
        self.calls = {"on": 0, "off": 0}
        self._fail_at: dict[str, int] = {}

    def fail_call(self, method: str, after: int = 0) -> None:
        """Make the call to *method* that follows *after* successful ones raise."""
        self._fail_at[method] = self.calls[method] + after + 1

    def _count(self, method: str) -> None:
        self.calls[method] += 1
        if self.calls[method] == self._fail_at.get(method):
            raise RuntimeError(f"{method} failed")

    def on(self, event, listener) -> None:
        self._count("on")
        super().on(event, listener)

    def off(self, event, listener) -> None:
        self._count("off")
        super().off(event, listener)


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def source_graph() -> EventedGraph:
    """Three nodes in a path a -> b -> c with a few attributes."""
    return build_graph(
        nodes={
            "a": {"color": "red", "size": 5},
            "b": {"color": "blue", "size": 3},
            "c": {"color": "green", "size": 1},
        },
        edges=[
            ("ab", "a", "b", {"weight": 1, "label": "x"}),
            ("bc", "b", "c", {"weight": 2, "label": "y"}),
        ],
        attributes={"name": "source", "version": 2},
    )


@pytest.fixture
def target_graph() -> EventedGraph:
    return EventedGraph()


@pytest.fixture
def make_graph():
    """Factory fixture exposing ``build_graph``."""
    return build_graph


@pytest.fixture
def flaky_graph() -> FlakyGraph:
    return FlakyGraph()
