"""Temporary detachment of graph event listeners.

A bulk sync mutates many elements; detaching the listeners of selected
events keeps downstream observers from receiving one event per element.
``suspend`` detaches and records them, ``restore`` puts them back in their
original order.  ``sleeping_listeners`` wraps both so restoration runs on
every exit path.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterable, Iterator

if TYPE_CHECKING:
    from graph_sync.graph.events import Listener
    from graph_sync.graph.protocols import SyncableGraph

logger = logging.getLogger(__name__)


class SuspendedListeners:
    """Listeners detached from one graph, keyed by event name.

    Restoring is one-shot: a second ``restore`` call does nothing, so a
    listener is never attached twice.
    """

    def __init__(
        self, graph: SyncableGraph, detached: dict[str, list[Listener]]
    ) -> None:
        self._graph: SyncableGraph | None = graph
        self.detached = detached

    @property
    def restored(self) -> bool:
        return self._graph is None

    def restore(self) -> None:
        """Reattach every detached listener to its event, in order.

        A listener that fails to reattach does not stop the others; the
        first such error is re-raised once every listener was attempted.
        """
        graph = self._graph
        if graph is None:
            return
        # One-shot, even if reattaching fails part way
        self._graph = None
        failure: Exception | None = None
        for event, listeners in self.detached.items():
            for listener in listeners:
                try:
                    graph.on(event, listener)
                except Exception as exc:
                    logger.error(
                        "Could not reattach a %s listener: %s", event, exc
                    )
                    if failure is None:
                        failure = exc
            if listeners:
                logger.debug(
                    "Restored %d listener(s) for %s", len(listeners), event
                )
        if failure is not None:
            raise failure


def suspend(graph: SyncableGraph, events: Iterable[str]) -> SuspendedListeners:
    """Detach every listener currently registered for *events* on *graph*.

    Repeated event names are only processed once.  Listeners of events not
    named keep firing.

    Returns:
        A handle whose ``restore()`` reattaches what was detached.
    """
    detached: dict[str, list[Listener]] = {}
    try:
        for event in events:
            name = str(getattr(event, "value", event))
            if name in detached:
                continue
            removed = detached[name] = []
            for listener in graph.listeners(name):
                graph.off(name, listener)
                removed.append(listener)
            if removed:
                logger.debug(
                    "Suspended %d listener(s) for %s", len(removed), name
                )
    except Exception:
        # Reattach whatever was already detached before the failure
        SuspendedListeners(graph, detached).restore()
        raise
    return SuspendedListeners(graph, detached)


def restore(handle: SuspendedListeners) -> None:
    """Reattach the listeners recorded in *handle*."""
    handle.restore()


@contextmanager
def sleeping_listeners(
    graph: SyncableGraph, events: Iterable[str]
) -> Iterator[SuspendedListeners]:
    """Keep the listeners of *events* detached for the ``with`` block."""
    handle = suspend(graph, events)
    try:
        yield handle
    finally:
        handle.restore()
