"""Sync report formatting functions.

- ``format_sync_report`` -- full post-sync summary.
- ``format_dry_run_preview`` -- dry-run preview grouped by action.
- ``report_to_json`` -- structured dict for JSON serialisation.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import SyncReport

from .models import SyncAction

# ------------------------------------------------------------------
# Human-readable report
# ------------------------------------------------------------------


def format_sync_report(report: SyncReport) -> str:
    """Format a complete sync report as human-readable text.

    Sections are only included when they contain at least one result.
    Skipped elements are summarised by count only.

    Args:
        report: The completed sync report.

    Returns:
        Multi-line formatted string.
    """
    lines: list[str] = []

    header = "Graph sync report"
    if report.dry_run:
        header += " (DRY RUN)"
    lines.append(header)
    lines.append(f"Started: {report.started_at}")
    if report.completed_at:
        lines.append(f"Completed: {report.completed_at}")
    lines.append("")

    lines.append(
        f"Visited {len(report.nodes)} nodes and {len(report.edges)} edges: "
        f"{len(report.merged)} merged ({len(report.created)} created), "
        f"{len(report.dropped)} dropped"
    )
    lines.append("")

    if report.graph_attributes_merged:
        lines.append(
            "Graph attributes: "
            + ", ".join(report.graph_attributes_merged)
        )
        lines.append("")

    if report.merged:
        lines.append("Merged:")
        for r in report.merged:
            suffix = " (new)" if r.created else ""
            lines.append(f"  {r.kind} {r.key}{suffix}")
        lines.append("")

    if report.dropped:
        lines.append("Dropped:")
        for r in report.dropped:
            lines.append(f"  {r.kind} {r.key}")
        lines.append("")

    if report.skipped:
        lines.append(f"Skipped: {len(report.skipped)} elements")
        lines.append("")

    return "\n".join(lines).rstrip()


# ------------------------------------------------------------------
# Dry-run preview
# ------------------------------------------------------------------


def format_dry_run_preview(report: SyncReport) -> str:
    """Format a dry-run preview grouped by action type.

    Each proposed action is shown as ``kind key`` under an ``[ACTION]``
    heading.

    Args:
        report: A dry-run sync report (``dry_run=True``).

    Returns:
        Multi-line formatted string.
    """
    lines: list[str] = ["DRY RUN -- No changes will be made", ""]

    groups: dict[SyncAction, list[str]] = defaultdict(list)
    for r in report.results:
        groups[r.action].append(f"{r.kind} {r.key}")

    display_order = [
        SyncAction.MERGE,
        SyncAction.MERGE_AND_DROP,
        SyncAction.DROP,
    ]

    for action in display_order:
        if action not in groups:
            continue
        label = action.value.upper().replace("_", " ")
        lines.append(f"[{label}]")
        for element in groups[action]:
            lines.append(f"  {element}")
        lines.append("")

    skip_count = len(groups.get(SyncAction.SKIP, []))
    if skip_count > 0:
        lines.append(f"Skipped: {skip_count} elements")
        lines.append("")

    if not any(a != SyncAction.SKIP for a in groups):
        lines.append("No changes needed.")
        lines.append("")

    return "\n".join(lines).rstrip()


# ------------------------------------------------------------------
# JSON output
# ------------------------------------------------------------------


def report_to_json(report: SyncReport) -> dict:
    """Convert a sync report to a structured dict for JSON serialisation.

    Args:
        report: The sync report.

    Returns:
        Dict with timestamps, counts, and per-element details.
    """
    results_list = [
        {
            "kind": r.kind,
            "key": r.key,
            "action": r.action.value,
            "existed": r.existed,
        }
        for r in report.results
    ]

    return {
        "dry_run": report.dry_run,
        "started_at": report.started_at,
        "completed_at": report.completed_at,
        "graph_attributes_merged": list(report.graph_attributes_merged),
        "counts": {
            "nodes": len(report.nodes),
            "edges": len(report.edges),
            "merged": len(report.merged),
            "created": len(report.created),
            "dropped": len(report.dropped),
            "skipped": len(report.skipped),
        },
        "results": results_list,
    }
