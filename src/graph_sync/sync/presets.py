"""Ready-made option sets."""

from __future__ import annotations

from graph_sync.graph.events import GraphEvent

from .models import SyncOptions
from .predicates import always

#: Merges nothing and drops nothing; only graph attributes propagate.
SYNC_OPTIONS_NONE = SyncOptions()

#: Merges every source node and edge into the target.
SYNC_OPTIONS_ALL = SYNC_OPTIONS_NONE.with_overrides(
    merge_node=(always,),
    merge_edge=(always,),
)

#: The per-element events worth silencing during a bulk sync.
REASONABLE_SLEEP_EVENTS: tuple[str, ...] = (
    GraphEvent.NODE_ADDED.value,
    GraphEvent.NODE_ATTRIBUTES_UPDATED.value,
    GraphEvent.NODE_DROPPED.value,
    GraphEvent.EDGE_ADDED.value,
    GraphEvent.EDGE_ATTRIBUTES_UPDATED.value,
    GraphEvent.EDGE_DROPPED.value,
)
