"""Unified configuration schema for graph_sync.

Defines Pydantic models for named sync profiles and logging, and the
adapter that turns a profile into executable ``SyncOptions``.

Usage:
    from graph_sync.config_loader import load_hierarchical_config
    from graph_sync.config_schema import build_config, to_sync_options

    unified = build_config(load_hierarchical_config())
    options = to_sync_options(unified.profile("mirror"))
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from .graph.events import GraphEvent
from .sync.models import SyncOptions
from .sync.predicates import predicate_names, resolve_predicate
from .sync.presets import REASONABLE_SLEEP_EVENTS

logger = logging.getLogger(__name__)

_EVENT_NAMES = frozenset(event.value for event in GraphEvent)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class SyncProfileConfig(BaseModel):
    """One named sync policy.

    Predicate fields hold built-in predicate names (see
    ``graph_sync.sync.predicates``).  Sleep-event fields hold event names,
    or the string ``"reasonable"`` for ``REASONABLE_SLEEP_EVENTS``.
    Every field defaults to empty, so an empty profile merges nothing.
    """

    merge_node: list[str] = Field(
        default_factory=list, description="Node merge predicates (OR)"
    )
    merge_edge: list[str] = Field(
        default_factory=list, description="Edge merge predicates (OR)"
    )
    drop_node: list[str] = Field(
        default_factory=list, description="Node drop predicates (OR)"
    )
    drop_edge: list[str] = Field(
        default_factory=list, description="Edge drop predicates (OR)"
    )
    sleep_events_source: list[str] = Field(
        default_factory=list,
        description="Events silenced on the source graph",
    )
    sleep_events_target: list[str] = Field(
        default_factory=list,
        description="Events silenced on the target graph",
    )
    include_attributes: list[str] = Field(default_factory=list)
    ignore_attributes: list[str] = Field(default_factory=list)
    include_node_attributes: list[str] = Field(default_factory=list)
    ignore_node_attributes: list[str] = Field(default_factory=list)
    include_edge_attributes: list[str] = Field(default_factory=list)
    ignore_edge_attributes: list[str] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator(
        "merge_node", "merge_edge", "drop_node", "drop_edge"
    )
    @classmethod
    def _known_predicates(cls, names: list[str]) -> list[str]:
        valid = predicate_names()
        for name in names:
            if name not in valid:
                raise ValueError(
                    f"unknown predicate '{name}' "
                    f"(valid: {', '.join(valid)})"
                )
        return names

    @field_validator(
        "sleep_events_source", "sleep_events_target", mode="before"
    )
    @classmethod
    def _known_events(cls, value: object) -> object:
        if value == "reasonable":
            return list(REASONABLE_SLEEP_EVENTS)
        if isinstance(value, list):
            for name in value:
                if name not in _EVENT_NAMES:
                    raise ValueError(
                        f"unknown graph event '{name}' "
                        f"(valid: {', '.join(sorted(_EVENT_NAMES))})"
                    )
        return value


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has defaults, so ``UnifiedConfig()`` (zero-config) is
    always valid.
    """

    sync: dict[str, SyncProfileConfig] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}

    def profile(self, name: str) -> SyncProfileConfig:
        """Return the sync profile called *name*.

        Raises:
            ValueError: If no such profile is configured.
        """
        try:
            return self.sync[name]
        except KeyError:
            available = ", ".join(sorted(self.sync)) or "(none)"
            raise ValueError(
                f"Sync profile '{name}' not found. Available: {available}"
            ) from None


# ---------------------------------------------------------------------------
# Factory functions
# ---------------------------------------------------------------------------


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Handles missing sections gracefully. Anything absent gets defaults.
    A ``sync`` section that is present but empty (``sync:`` in YAML) is
    treated as no profiles.

    Args:
        raw_data: Merged configuration dictionary.

    Returns:
        Validated ``UnifiedConfig`` instance.
    """
    if not raw_data:
        return UnifiedConfig()

    data = dict(raw_data)
    if data.get("sync") is None:
        data.pop("sync", None)
    return UnifiedConfig(**data)


def to_sync_options(profile: SyncProfileConfig) -> SyncOptions:
    """Resolve a profile's predicate names into a ``SyncOptions``."""
    options = SyncOptions(
        merge_node=[resolve_predicate(n, "node") for n in profile.merge_node],
        merge_edge=[resolve_predicate(n, "edge") for n in profile.merge_edge],
        drop_node=[resolve_predicate(n, "node") for n in profile.drop_node],
        drop_edge=[resolve_predicate(n, "edge") for n in profile.drop_edge],
        sleep_events_source=profile.sleep_events_source,
        sleep_events_target=profile.sleep_events_target,
        include_attributes=profile.include_attributes,
        ignore_attributes=profile.ignore_attributes,
        include_node_attributes=profile.include_node_attributes,
        ignore_node_attributes=profile.ignore_node_attributes,
        include_edge_attributes=profile.include_edge_attributes,
        ignore_edge_attributes=profile.ignore_edge_attributes,
    )
    logger.debug("Resolved sync profile into %r", options)
    return options
