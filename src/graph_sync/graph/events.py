"""Graph event names and an ordered listener registry."""

from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Any, Callable

Listener = Callable[[dict[str, Any]], None]


class GraphEvent(str, Enum):
    """Events emitted by an ``EventedGraph``.

    Values follow the camelCase names used by graphology so config files
    and callers can refer to events by their familiar names.
    """

    NODE_ADDED = "nodeAdded"
    EDGE_ADDED = "edgeAdded"
    NODE_DROPPED = "nodeDropped"
    EDGE_DROPPED = "edgeDropped"
    CLEARED = "cleared"
    EDGES_CLEARED = "edgesCleared"
    ATTRIBUTES_UPDATED = "attributesUpdated"
    NODE_ATTRIBUTES_UPDATED = "nodeAttributesUpdated"
    EDGE_ATTRIBUTES_UPDATED = "edgeAttributesUpdated"


def _event_name(event: str) -> str:
    # GraphEvent members and plain strings share one key space
    return event.value if isinstance(event, GraphEvent) else str(event)


class EventRegistry:
    """Listeners keyed by event name, kept in registration order.

    The same callable may be registered several times for one event; each
    registration fires once per emit and ``off`` removes one registration.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> None:
        """Register *listener* for *event*."""
        self._listeners[_event_name(event)].append(listener)

    def off(self, event: str, listener: Listener) -> None:
        """Remove the first registration of *listener* for *event*.

        Removing a listener that is not registered is a no-op.
        """
        registered = self._listeners.get(_event_name(event))
        if not registered:
            return
        for index, candidate in enumerate(registered):
            if candidate == listener:
                del registered[index]
                return

    def listeners(self, event: str) -> list[Listener]:
        """Return a copy of the listeners registered for *event*."""
        return list(self._listeners.get(_event_name(event), ()))

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(_event_name(event), ()))

    def emit(self, event: str, payload: dict[str, Any]) -> None:
        """Call every listener of *event* with *payload*.

        Iterates over a snapshot, so listeners may register or remove
        listeners without affecting the current emit.
        """
        name = _event_name(event)
        for listener in list(self._listeners.get(name, ())):
            listener(payload)
