"""Pydantic models for the graph sync engine.

- ``SyncOptions``: the merge/drop policy and attribute filters for one call.
- ``SyncAction``: what happened to one source element.
- ``SyncResult``: outcome for one node or edge.
- ``SyncReport``: aggregate results for a full sync run.

All models are frozen (immutable).
"""

from __future__ import annotations

from collections.abc import Hashable
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel

from .decision import Predicate


class SyncOptions(BaseModel):
    """Policy for one sync call.

    Predicate fields are OR-combined; an empty tuple means "never".  Drop
    predicates are only consulted for elements the target held before the
    element's merge step.  Sleep-event fields name the events whose
    listeners are detached from the source/target for the call.

    Attribute filters come in include/ignore pairs for the graph itself,
    for nodes, and for edges.  A non-empty include list overrides the
    matching ignore list entirely.
    """

    merge_node: tuple[Predicate, ...] = ()
    merge_edge: tuple[Predicate, ...] = ()
    drop_node: tuple[Predicate, ...] = ()
    drop_edge: tuple[Predicate, ...] = ()
    sleep_events_source: tuple[str, ...] = ()
    sleep_events_target: tuple[str, ...] = ()
    include_attributes: tuple[str, ...] = ()
    ignore_attributes: tuple[str, ...] = ()
    include_node_attributes: tuple[str, ...] = ()
    ignore_node_attributes: tuple[str, ...] = ()
    include_edge_attributes: tuple[str, ...] = ()
    ignore_edge_attributes: tuple[str, ...] = ()

    model_config = {"frozen": True, "extra": "forbid"}

    def with_overrides(self, **overrides: Any) -> SyncOptions:
        """Return a validated copy with the given fields replaced.

        Raises:
            pydantic.ValidationError: On unknown field names or bad values.
        """
        return type(self).model_validate({**dict(self), **overrides})


class SyncAction(str, Enum):
    """Outcome for one source element."""

    SKIP = "skip"
    MERGE = "merge"
    DROP = "drop"
    MERGE_AND_DROP = "merge_and_drop"


class SyncResult(BaseModel):
    """Result of reconciling one node or edge.

    Attributes:
        kind: ``"node"`` or ``"edge"``.
        key: Element identifier, kept as the graph reports it.
        action: What the policy decided for the element.
        existed: Whether the target held the element before its merge step.
    """

    kind: Literal["node", "edge"]
    key: Hashable
    action: SyncAction
    existed: bool = False

    model_config = {"frozen": True}

    @property
    def created(self) -> bool:
        """True when the merge step added the element to the target."""
        return not self.existed and self.action == SyncAction.MERGE


class SyncReport(BaseModel):
    """Aggregate report for a full sync run.

    Attributes:
        dry_run: Whether decisions were computed without mutating the target.
        results: Per-element results in visiting order (nodes, then edges).
        graph_attributes_merged: Names of graph-level attributes written.
        started_at: ISO 8601 timestamp when the run started.
        completed_at: ISO 8601 timestamp when the run completed.
    """

    dry_run: bool = False
    results: list[SyncResult] = []
    graph_attributes_merged: list[str] = []
    started_at: str
    completed_at: str | None = None

    model_config = {"frozen": True}

    @property
    def nodes(self) -> list[SyncResult]:
        return [r for r in self.results if r.kind == "node"]

    @property
    def edges(self) -> list[SyncResult]:
        return [r for r in self.results if r.kind == "edge"]

    @property
    def merged(self) -> list[SyncResult]:
        """Results where the element was merged (including merge-and-drop)."""
        return [
            r
            for r in self.results
            if r.action in (SyncAction.MERGE, SyncAction.MERGE_AND_DROP)
        ]

    @property
    def dropped(self) -> list[SyncResult]:
        """Results where the element was dropped from the target."""
        return [
            r
            for r in self.results
            if r.action in (SyncAction.DROP, SyncAction.MERGE_AND_DROP)
        ]

    @property
    def created(self) -> list[SyncResult]:
        """Results where the element was newly added to the target."""
        return [r for r in self.results if r.created]

    @property
    def skipped(self) -> list[SyncResult]:
        """Results where action is SKIP."""
        return [r for r in self.results if r.action == SyncAction.SKIP]

    def summary(self) -> str:
        """Format a human-readable summary of the sync run.

        Returns:
            Multi-line summary string with counts by action.
        """
        lines = [
            "Graph sync report" + (" (dry run)" if self.dry_run else ""),
            f"  Nodes visited:  {len(self.nodes)}",
            f"  Edges visited:  {len(self.edges)}",
            f"  Merged:         {len(self.merged)}",
            f"  Created:        {len(self.created)}",
            f"  Dropped:        {len(self.dropped)}",
            f"  Skipped:        {len(self.skipped)}",
            f"  Graph attrs:    {len(self.graph_attributes_merged)}",
        ]
        return "\n".join(lines)
