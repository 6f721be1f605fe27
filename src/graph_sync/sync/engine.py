"""Core engine that reconciles a target graph against a source graph.

One run:

1. Detaches the configured sleep-event listeners from both graphs.
2. Merges the projected graph-level attributes into the target.
3. Visits every source node: merges it when a merge predicate accepts it,
   then drops it when the target held it beforehand and a drop predicate
   accepts it.
4. Visits every source edge the same way.
5. Reattaches the detached listeners.

Step 5 runs on every exit path.  Any other failure (a predicate raising,
the target rejecting a mutation) aborts the remaining iteration and
propagates unchanged.  Target elements absent from the source are never
visited.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from datetime import datetime, timezone
from typing import Any

from graph_sync.graph.protocols import SyncableGraph
from graph_sync.sync.decision import decide
from graph_sync.sync.models import (
    SyncAction,
    SyncOptions,
    SyncReport,
    SyncResult,
)
from graph_sync.sync.presets import SYNC_OPTIONS_NONE
from graph_sync.sync.projection import project_attributes
from graph_sync.sync.suspend import restore, suspend

logger = logging.getLogger(__name__)


class SyncEngine:
    """Apply a ``SyncOptions`` policy from a source graph to a target graph.

    The engine holds no reference to either graph between runs; both are
    only borrowed for the duration of ``run``.

    Args:
        options: The merge/drop policy. Defaults to ``SYNC_OPTIONS_NONE``.
    """

    def __init__(self, options: SyncOptions | None = None) -> None:
        self.options = options if options is not None else SYNC_OPTIONS_NONE

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def run(
        self,
        source: SyncableGraph,
        target: SyncableGraph,
        dry_run: bool = False,
    ) -> SyncReport:
        """Execute a full sync pass from *source* into *target*.

        Args:
            source: Graph to read from. Never mutated.
            target: Graph to reconcile.
            dry_run: If ``True``, evaluate every decision against the
                current target but do not mutate it or touch listeners.

        Returns:
            A ``SyncReport`` describing what was (or would be) done.
        """
        started_at = datetime.now(timezone.utc).isoformat()
        logger.info("Starting graph sync (dry_run=%s)", dry_run)

        if dry_run:
            graph_attributes, results = self._reconcile(
                source, target, dry_run=True
            )
        else:
            source_handle = suspend(source, self.options.sleep_events_source)
            target_handle = None
            try:
                target_handle = suspend(
                    target, self.options.sleep_events_target
                )
                graph_attributes, results = self._reconcile(
                    source, target, dry_run=False
                )
            finally:
                # Each side is released even if the other side's release fails
                try:
                    restore(source_handle)
                finally:
                    if target_handle is not None:
                        restore(target_handle)

        report = SyncReport(
            dry_run=dry_run,
            results=results,
            graph_attributes_merged=graph_attributes,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            "Graph sync finished: %d merged, %d created, %d dropped, "
            "%d skipped",
            len(report.merged),
            len(report.created),
            len(report.dropped),
            len(report.skipped),
        )
        return report

    # ------------------------------------------------------------------
    # Reconciliation phases
    # ------------------------------------------------------------------

    def _reconcile(
        self,
        source: SyncableGraph,
        target: SyncableGraph,
        dry_run: bool,
    ) -> tuple[list[str], list[SyncResult]]:
        graph_attributes = self._merge_graph_attributes(
            source, target, dry_run
        )
        results = self._reconcile_nodes(source, target, dry_run)
        results.extend(self._reconcile_edges(source, target, dry_run))
        return graph_attributes, results

    def _merge_graph_attributes(
        self,
        source: SyncableGraph,
        target: SyncableGraph,
        dry_run: bool,
    ) -> list[str]:
        """Merge projected graph-level attributes, independent of predicates."""
        attributes = project_attributes(
            source.get_attributes(),
            self.options.include_attributes,
            self.options.ignore_attributes,
        )
        if not dry_run:
            target.merge_attributes(attributes)
        return list(attributes)

    def _reconcile_nodes(
        self,
        source: SyncableGraph,
        target: SyncableGraph,
        dry_run: bool,
    ) -> list[SyncResult]:
        opts = self.options
        results: list[SyncResult] = []
        key = None
        try:
            for key, attributes in source.iter_nodes():
                existed = target.has_node(key)

                should_merge = decide(opts.merge_node, key, source, target)
                if should_merge and not dry_run:
                    target.merge_node(
                        key,
                        project_attributes(
                            attributes,
                            opts.include_node_attributes,
                            opts.ignore_node_attributes,
                        ),
                    )

                # Eligibility uses pre-merge existence: a node created by
                # this pass is never dropped by it
                should_drop = existed and decide(
                    opts.drop_node, key, source, target
                )
                if should_drop and not dry_run:
                    target.drop_node(key)

                results.append(
                    _result("node", key, should_merge, should_drop, existed)
                )
        except Exception as exc:
            logger.error("Sync aborted at node %r: %s", key, exc)
            raise
        return results

    def _reconcile_edges(
        self,
        source: SyncableGraph,
        target: SyncableGraph,
        dry_run: bool,
    ) -> list[SyncResult]:
        opts = self.options
        results: list[SyncResult] = []
        key = None
        try:
            for key, attributes, edge_source, edge_target in (
                source.iter_edges()
            ):
                existed = target.has_edge(key)

                should_merge = decide(opts.merge_edge, key, source, target)
                if should_merge and not dry_run:
                    target.merge_edge_with_key(
                        key,
                        edge_source,
                        edge_target,
                        project_attributes(
                            attributes,
                            opts.include_edge_attributes,
                            opts.ignore_edge_attributes,
                        ),
                    )

                should_drop = existed and decide(
                    opts.drop_edge, key, source, target
                )
                if should_drop and not dry_run:
                    target.drop_edge(key)

                results.append(
                    _result("edge", key, should_merge, should_drop, existed)
                )
        except Exception as exc:
            logger.error("Sync aborted at edge %r: %s", key, exc)
            raise
        return results


def _result(
    kind: str,
    key: Hashable,
    merged: bool,
    dropped: bool,
    existed: bool,
) -> SyncResult:
    if merged and dropped:
        action = SyncAction.MERGE_AND_DROP
    elif merged:
        action = SyncAction.MERGE
    elif dropped:
        action = SyncAction.DROP
    else:
        action = SyncAction.SKIP
    logger.debug("%s %r: %s (existed=%s)", kind, key, action.value, existed)
    return SyncResult(kind=kind, key=key, action=action, existed=existed)


def sync(
    source: SyncableGraph,
    target: SyncableGraph,
    options: SyncOptions | None = None,
    *,
    dry_run: bool = False,
    **overrides: Any,
) -> SyncReport:
    """Sync *source* into *target* in one call.

    Keyword overrides replace individual fields of *options* (or of
    ``SYNC_OPTIONS_NONE`` when *options* is omitted), so
    ``sync(a, b, merge_node=[always])`` merges every node and nothing else.
    """
    base = options if options is not None else SYNC_OPTIONS_NONE
    if overrides:
        base = base.with_overrides(**overrides)
    return SyncEngine(base).run(source, target, dry_run=dry_run)
