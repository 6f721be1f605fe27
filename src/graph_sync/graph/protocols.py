"""Capability interface the sync engine requires from a graph.

Any object satisfying ``SyncableGraph`` can be used as a source or target.
The source side only needs the read and event methods; the target side
needs all of them.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Protocol, runtime_checkable

from .events import Listener


@runtime_checkable
class SyncableGraph(Protocol):
    """Read, write, and event capabilities of a reconcilable graph."""

    # Read side

    def has_node(self, key: str) -> bool: ...

    def has_edge(self, key: str) -> bool: ...

    def iter_nodes(self) -> Iterator[tuple[str, dict[str, Any]]]:
        """Yield ``(key, attributes)`` in insertion order."""
        ...

    def iter_edges(self) -> Iterator[tuple[str, dict[str, Any], str, str]]:
        """Yield ``(key, attributes, source, target)`` in insertion order."""
        ...

    def get_attributes(self) -> dict[str, Any]: ...

    # Write side

    def merge_attributes(self, attributes: Mapping[str, Any]) -> None: ...

    def merge_node(self, key: str, attributes: Mapping[str, Any]) -> None: ...

    def drop_node(self, key: str) -> None: ...

    def merge_edge_with_key(
        self,
        key: str,
        source: str,
        target: str,
        attributes: Mapping[str, Any],
    ) -> None: ...

    def drop_edge(self, key: str) -> None: ...

    # Event side

    def listeners(self, event: str) -> list[Listener]: ...

    def on(self, event: str, listener: Listener) -> None: ...

    def off(self, event: str, listener: Listener) -> None: ...
