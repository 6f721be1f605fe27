"""Tests for graph_sync.config_loader -- hierarchical config loading."""

import textwrap
from pathlib import Path

import pytest
import yaml

from graph_sync.config_loader import (
    _interpolate_recursive,
    discover_config_files,
    interpolate_env_vars,
    load_config_file,
    load_hierarchical_config,
)


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run in an empty CWD with a fake HOME and no config env var."""
    monkeypatch.delenv("GRAPH_SYNC_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text))
    return path


# -------------------------------------------------------------------------
# Env var interpolation
# -------------------------------------------------------------------------


class TestInterpolateEnvVars:
    """Tests for ${VAR} and ${VAR:-default} substitution."""

    def test_replaces_set_var(self, monkeypatch):
        monkeypatch.setenv("SYNC_PROFILE", "mirror")
        assert interpolate_env_vars("${SYNC_PROFILE}") == "mirror"

    def test_unset_var_replaced_with_empty(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert interpolate_env_vars("${UNSET_VAR_XYZ}") == ""

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert (
            interpolate_env_vars("${UNSET_VAR_XYZ:-always}") == "always"
        )

    def test_default_ignored_when_set(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL_X", "DEBUG")
        assert interpolate_env_vars("${LOG_LEVEL_X:-INFO}") == "DEBUG"

    def test_empty_env_var_uses_default(self, monkeypatch):
        monkeypatch.setenv("EMPTY_VAR", "")
        assert (
            interpolate_env_vars("${EMPTY_VAR:-fallback}") == "fallback"
        )

    def test_multiple_vars_in_one_string(self, monkeypatch):
        monkeypatch.setenv("PART_A", "node")
        monkeypatch.setenv("PART_B", "Added")
        assert interpolate_env_vars("${PART_A}${PART_B}") == "nodeAdded"

    def test_unterminated_left_untouched(self):
        assert interpolate_env_vars("${NO_CLOSE") == "${NO_CLOSE"

    def test_recursive_over_dicts_and_lists(self, monkeypatch):
        monkeypatch.setenv("IGNORED_ATTR", "internal")
        data = {
            "sync": {
                "mirror": {"ignore_node_attributes": ["${IGNORED_ATTR}", 3]}
            },
            "count": 42,
            "enabled": True,
        }
        assert _interpolate_recursive(data) == {
            "sync": {"mirror": {"ignore_node_attributes": ["internal", 3]}},
            "count": 42,
            "enabled": True,
        }


# -------------------------------------------------------------------------
# YAML !include support
# -------------------------------------------------------------------------


class TestIncludeDirective:
    """Tests for !include YAML loading via IncludeLoader."""

    def test_include_relative_file(self, tmp_path):
        _write(tmp_path / "profiles.yml", "mirror:\n  merge_node: [always]\n")
        main = _write(tmp_path / "config.yml", "sync: !include profiles.yml\n")

        assert load_config_file(main) == {
            "sync": {"mirror": {"merge_node": ["always"]}}
        }

    def test_include_absolute_path(self, tmp_path):
        other = _write(tmp_path / "abs.yml", "level: DEBUG\n")
        main = _write(tmp_path / "config.yml", f"logging: !include {other}\n")

        assert load_config_file(main) == {"logging": {"level": "DEBUG"}}

    def test_include_nonexistent_raises(self, tmp_path):
        main = _write(tmp_path / "config.yml", "data: !include missing.yml\n")

        with pytest.raises(FileNotFoundError, match="missing.yml"):
            load_config_file(main)

    def test_circular_include_raises(self, tmp_path):
        a = _write(tmp_path / "a.yml", "x: !include b.yml\n")
        _write(tmp_path / "b.yml", "y: !include a.yml\n")

        with pytest.raises(ValueError, match="Circular include"):
            load_config_file(a)

    def test_self_include_raises(self, tmp_path):
        a = _write(tmp_path / "a.yml", "x: !include a.yml\n")

        with pytest.raises(ValueError, match="Circular include"):
            load_config_file(a)

    def test_nested_includes(self, tmp_path):
        _write(tmp_path / "c.yml", "val: deep\n")
        _write(tmp_path / "sub" / "b.yml", "inner: !include ../c.yml\n")
        a = _write(tmp_path / "a.yml", "outer: !include sub/b.yml\n")

        assert load_config_file(a) == {"outer": {"inner": {"val": "deep"}}}

    def test_same_file_included_twice(self, tmp_path):
        _write(tmp_path / "events.yml", "[nodeAdded, edgeAdded]\n")
        main = _write(
            tmp_path / "config.yml",
            """\
            source: !include events.yml
            target: !include events.yml
            """,
        )

        result = load_config_file(main)
        assert result["source"] == result["target"] == [
            "nodeAdded",
            "edgeAdded",
        ]

    def test_global_safe_loader_not_polluted(self, tmp_path):
        cfg = _write(tmp_path / "test.yml", "x: !include other.yml\n")

        with pytest.raises(yaml.constructor.ConstructorError):
            with open(cfg) as fh:
                yaml.safe_load(fh)


# -------------------------------------------------------------------------
# Convention-based file discovery
# -------------------------------------------------------------------------


class TestDiscoverConfigFiles:
    """Tests for discover_config_files() precedence and filtering."""

    def test_env_var_takes_highest_precedence(self, isolated, monkeypatch):
        custom = _write(isolated / "custom.yml", "custom: true\n")
        _write(isolated / ".graph_sync" / "config.yml", "project: true\n")
        monkeypatch.setenv("GRAPH_SYNC_CONFIG", str(custom))

        result = discover_config_files()
        assert result[0] == custom.resolve()
        assert len(result) == 2

    def test_full_precedence_order(self, isolated):
        yml = _write(isolated / ".graph_sync" / "config.yml", "a: 1\n")
        yaml_ = _write(isolated / ".graph_sync" / "config.yaml", "b: 1\n")
        xdg = _write(
            isolated / "home" / ".config" / "graph_sync" / "config.yml",
            "c: 1\n",
        )

        assert discover_config_files() == [yml, yaml_, xdg]

    def test_missing_files_excluded(self, isolated):
        assert discover_config_files() == []

    def test_env_var_pointing_nowhere_ignored(self, isolated, monkeypatch):
        monkeypatch.setenv("GRAPH_SYNC_CONFIG", str(isolated / "nope.yml"))
        assert discover_config_files() == []


# -------------------------------------------------------------------------
# Hierarchical merge
# -------------------------------------------------------------------------


class TestLoadHierarchicalConfig:
    """Tests for load_hierarchical_config() merge and interpolation."""

    def test_zero_config_returns_empty_dict(self, isolated):
        assert load_hierarchical_config() == {}

    def test_global_only_loaded(self, isolated):
        _write(
            isolated / "home" / ".config" / "graph_sync" / "config.yml",
            """\
            logging:
              level: WARNING
            """,
        )

        assert load_hierarchical_config() == {"logging": {"level": "WARNING"}}

    def test_project_overrides_global_at_section_level(self, isolated):
        _write(
            isolated / "home" / ".config" / "graph_sync" / "config.yml",
            """\
            sync:
              global_profile:
                merge_node: [always]
            logging:
              level: WARNING
            """,
        )
        _write(
            isolated / ".graph_sync" / "config.yml",
            """\
            sync:
              mirror:
                merge_edge: [always]
            """,
        )

        result = load_hierarchical_config()
        # Project sync section replaces the global one entirely
        assert result["sync"] == {"mirror": {"merge_edge": ["always"]}}
        assert result["logging"] == {"level": "WARNING"}

    def test_env_var_interpolation_after_merge(self, isolated, monkeypatch):
        monkeypatch.setenv("GRAPH_SYNC_LOG_LEVEL", "DEBUG")
        _write(
            isolated / ".graph_sync" / "config.yml",
            """\
            logging:
              level: "${GRAPH_SYNC_LOG_LEVEL:-INFO}"
            """,
        )

        assert load_hierarchical_config()["logging"]["level"] == "DEBUG"

    def test_dotenv_supplies_variables(self, isolated, monkeypatch):
        # Registered so teardown removes the value load_dotenv sets
        monkeypatch.setenv("DOTENV_LOG_FILE", "placeholder")
        monkeypatch.delenv("DOTENV_LOG_FILE")
        (isolated / ".env").write_text("DOTENV_LOG_FILE=/tmp/sync.log\n")
        _write(
            isolated / ".graph_sync" / "config.yml",
            """\
            logging:
              file: "${DOTENV_LOG_FILE}"
            """,
        )

        assert load_hierarchical_config()["logging"]["file"] == "/tmp/sync.log"

    def test_include_within_merged_config(self, isolated):
        proj_dir = isolated / ".graph_sync"
        _write(proj_dir / "profiles.yml", "mirror:\n  merge_node: [always]\n")
        _write(
            proj_dir / "config.yml",
            """\
            sync: !include profiles.yml
            logging:
              level: INFO
            """,
        )

        result = load_hierarchical_config()
        assert result["sync"]["mirror"]["merge_node"] == ["always"]

    def test_non_dict_root_skipped(self, isolated, monkeypatch):
        custom = _write(isolated / "bad.yml", "- item1\n- item2\n")
        monkeypatch.setenv("GRAPH_SYNC_CONFIG", str(custom))

        assert load_hierarchical_config() == {}

    def test_broken_file_raises(self, isolated):
        _write(isolated / ".graph_sync" / "config.yml", "x: !include gone.yml\n")

        with pytest.raises(FileNotFoundError):
            load_hierarchical_config()
