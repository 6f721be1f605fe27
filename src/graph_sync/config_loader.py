"""
Hierarchical configuration loader for graph_sync.

Provides convention-based config file discovery, YAML !include support,
env var interpolation, and hierarchical merge with "project wins" semantics.

Usage:
    from graph_sync.config_loader import load_hierarchical_config

    config = load_hierarchical_config()
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 1. Env var interpolation
# ---------------------------------------------------------------------------

# ${VAR} or ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+?)(?::-(.*?))?\}")


def interpolate_env_vars(value: str) -> str:
    """Expand ``${VAR}`` and ``${VAR:-default}`` in *value*.

    An unset or empty variable expands to its default, or to ``""`` when
    no default is given.  An unterminated ``${`` is left as is.
    """

    def _expand(match: re.Match) -> str:
        name, default = match.group(1), match.group(2)
        current = os.environ.get(name)
        if current:
            return current
        return default if default is not None else ""

    return _ENV_VAR_PATTERN.sub(_expand, value)


def _interpolate_recursive(obj: Any) -> Any:
    """Apply ``interpolate_env_vars`` to every string in nested dicts/lists."""
    if isinstance(obj, str):
        return interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {key: _interpolate_recursive(val) for key, val in obj.items()}
    if isinstance(obj, list):
        return [_interpolate_recursive(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# 2. YAML !include support
# ---------------------------------------------------------------------------


class IncludeLoader(yaml.SafeLoader):
    """``SafeLoader`` that understands ``!include other.yml``.

    A subclass, so registering the constructor leaves ``yaml.SafeLoader``
    untouched.  Each instance carries the chain of files being loaded to
    reject circular includes.
    """

    include_chain: list[Path]


def _construct_include(loader: IncludeLoader, node: yaml.ScalarNode) -> Any:
    relative = Path(loader.construct_scalar(node))
    including_file = Path(loader.name).resolve()
    path = (
        relative
        if relative.is_absolute()
        else including_file.parent / relative
    ).resolve()

    if path in loader.include_chain:
        chain = " -> ".join(str(p) for p in [*loader.include_chain, path])
        raise ValueError(f"Circular include detected: {chain}")
    if not path.exists():
        raise FileNotFoundError(
            f"Include file not found: {path} (referenced from {including_file})"
        )

    return load_config_file(path, _include_chain=[*loader.include_chain, path])


IncludeLoader.add_constructor("!include", _construct_include)


def load_config_file(
    path: Path,
    *,
    _include_chain: list[Path] | None = None,
) -> Any:
    """Parse one YAML config file, resolving ``!include`` directives."""
    path = path.resolve()
    with open(path, "r", encoding="utf-8") as fh:
        loader = IncludeLoader(fh)
        loader.include_chain = _include_chain or [path]
        try:
            return loader.get_single_data()
        finally:
            loader.dispose()


# ---------------------------------------------------------------------------
# 3. Convention-based file discovery
# ---------------------------------------------------------------------------

CONFIG_ENV_VAR = "GRAPH_SYNC_CONFIG"


def discover_config_files() -> list[Path]:
    """Return existing config file paths in precedence order (highest first).

    Search order:
        1. ``GRAPH_SYNC_CONFIG`` env var (explicit single path).
        2. ``.graph_sync/config.yml`` in CWD (project-level)
        3. ``.graph_sync/config.yaml`` in CWD (alternate extension)
        4. ``~/.config/graph_sync/config.yml`` (XDG global)

    Only paths that exist on disk are returned.
    """
    candidates: list[Path] = []

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser().resolve())

    cwd = Path.cwd()
    candidates.append(cwd / ".graph_sync" / "config.yml")
    candidates.append(cwd / ".graph_sync" / "config.yaml")

    candidates.append(
        Path.home() / ".config" / "graph_sync" / "config.yml"
    )

    return [p for p in candidates if p.exists()]


# ---------------------------------------------------------------------------
# 4. Hierarchical merge
# ---------------------------------------------------------------------------


def load_hierarchical_config() -> dict[str, Any]:
    """Load and merge all discovered config files.

    A ``.env`` file in the working directory (or a parent) is loaded first,
    so it can set ``GRAPH_SYNC_CONFIG`` and values used by interpolation.
    Variables already present in the environment are not overridden.

    Merge strategy ("project wins"):
        Files are loaded from lowest precedence to highest.  Each file's
        top-level keys **replace** (not deep-merge) those from earlier files.

    After merging, env var interpolation is applied to all string values.

    Returns an empty dict when no config files exist (zero-config).
    """
    load_dotenv(find_dotenv(usecwd=True))
    paths = discover_config_files()

    if not paths:
        logger.debug(
            "No config files found, using zero-config defaults"
        )
        return {}

    # Merge from lowest precedence (last) to highest (first)
    merged: dict[str, Any] = {}
    for path in reversed(paths):
        logger.debug("Loading config: %s", path)
        try:
            data = load_config_file(path)
        except Exception:
            logger.exception("Failed to load config file %s", path)
            raise

        if isinstance(data, dict):
            # Shallow merge: top-level keys from higher-precedence win
            merged.update(data)
        elif data is not None:
            logger.warning(
                "Config file %s has non-dict root (%s), skipping",
                path,
                type(data).__name__,
            )

    merged = _interpolate_recursive(merged)  # type: ignore[assignment]

    return merged
