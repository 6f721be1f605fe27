"""One-directional graph reconciliation with listener suspension."""

from .graph import EventedGraph, GraphEvent, SyncableGraph
from .sync import (
    REASONABLE_SLEEP_EVENTS,
    SYNC_OPTIONS_ALL,
    SYNC_OPTIONS_NONE,
    SyncEngine,
    SyncOptions,
    SyncReport,
    sync,
)

__version__ = "0.1.0"

__all__ = [
    "REASONABLE_SLEEP_EVENTS",
    "SYNC_OPTIONS_ALL",
    "SYNC_OPTIONS_NONE",
    "EventedGraph",
    "GraphEvent",
    "SyncEngine",
    "SyncOptions",
    "SyncReport",
    "SyncableGraph",
    "__version__",
    "sync",
]
