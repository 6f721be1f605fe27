"""One-directional graph reconciliation.

Public API for applying a predicate-driven merge/drop policy from a source
graph to a target graph while the target's (and source's) chosen event
listeners are asleep.

Modules:

- ``engine``      -- ``SyncEngine`` and the ``sync()`` shortcut.
- ``models``      -- ``SyncOptions``, ``SyncAction``, ``SyncResult``,
  ``SyncReport``: core data contracts.
- ``projection``  -- include/ignore attribute projection.
- ``decision``    -- OR-combination of predicates.
- ``predicates``  -- built-in predicates and their config names.
- ``suspend``     -- listener suspension and restoration.
- ``presets``     -- ``SYNC_OPTIONS_NONE``, ``SYNC_OPTIONS_ALL``,
  ``REASONABLE_SLEEP_EVENTS``.
- ``reporter``    -- human-readable and JSON report formatting.

Usage example
-------------
::

    from graph_sync.graph import EventedGraph
    from graph_sync.sync import (
        REASONABLE_SLEEP_EVENTS,
        SYNC_OPTIONS_ALL,
        format_sync_report,
        sync,
    )

    report = sync(
        source,
        target,
        SYNC_OPTIONS_ALL,
        sleep_events_target=REASONABLE_SLEEP_EVENTS,
        include_node_attributes=["label"],
    )
    print(format_sync_report(report))
"""

from .decision import Predicate, decide
from .engine import SyncEngine, sync
from .models import SyncAction, SyncOptions, SyncReport, SyncResult
from .predicates import (
    always,
    edge_missing_in_target,
    edge_present_in_target,
    never,
    node_missing_in_target,
    node_present_in_target,
    resolve_predicate,
)
from .presets import (
    REASONABLE_SLEEP_EVENTS,
    SYNC_OPTIONS_ALL,
    SYNC_OPTIONS_NONE,
)
from .projection import project_attributes
from .reporter import (
    format_dry_run_preview,
    format_sync_report,
    report_to_json,
)
from .suspend import SuspendedListeners, restore, sleeping_listeners, suspend

__all__ = [
    "REASONABLE_SLEEP_EVENTS",
    "SYNC_OPTIONS_ALL",
    "SYNC_OPTIONS_NONE",
    "Predicate",
    "SuspendedListeners",
    "SyncAction",
    "SyncEngine",
    "SyncOptions",
    "SyncReport",
    "SyncResult",
    "always",
    "decide",
    "edge_missing_in_target",
    "edge_present_in_target",
    "format_dry_run_preview",
    "format_sync_report",
    "never",
    "node_missing_in_target",
    "node_present_in_target",
    "project_attributes",
    "report_to_json",
    "resolve_predicate",
    "restore",
    "sleeping_listeners",
    "suspend",
    "sync",
]
