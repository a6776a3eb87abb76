"""Tests for cluster configuration loading."""

from pathlib import Path

import pytest

from coordinator.config import ClusterConfig, load_cluster_config
from coordinator.exceptions import InvalidConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DFS_NODE_COUNT",
        "DFS_REPLICATION_FACTOR",
        "DFS_STORAGE_ROOT",
        "DFS_LOW_REPLICA_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path, monkeypatch):
    """Test defaults match a four node, three replica cluster in the working directory."""
    monkeypatch.chdir(tmp_path)

    config = load_cluster_config()

    assert config.node_count == 4
    assert config.replication_factor == 3
    assert config.low_replica_threshold == 2
    assert config.storage_root == tmp_path


def test_environment_overrides(monkeypatch, tmp_path):
    """Test DFS_* environment variables are applied."""
    monkeypatch.setenv("DFS_NODE_COUNT", "6")
    monkeypatch.setenv("DFS_REPLICATION_FACTOR", "2")
    monkeypatch.setenv("DFS_STORAGE_ROOT", str(tmp_path / "nodes"))
    monkeypatch.setenv("DFS_LOW_REPLICA_THRESHOLD", "1")

    config = load_cluster_config()

    assert config.node_count == 6
    assert config.replication_factor == 2
    assert config.storage_root == tmp_path / "nodes"
    assert config.low_replica_threshold == 1


def test_keyword_overrides_win_over_environment(monkeypatch):
    """Test CLI-style overrides take precedence and None is ignored."""
    monkeypatch.setenv("DFS_NODE_COUNT", "6")
    monkeypatch.setenv("DFS_REPLICATION_FACTOR", "2")

    config = load_cluster_config(node_count=8, replication_factor=None)

    assert config.node_count == 8
    assert config.replication_factor == 2


@pytest.mark.parametrize("overrides", [
    {"node_count": 0},
    {"replication_factor": 0},
    {"node_count": "many"},
])
def test_invalid_values_raise_invalid_config(overrides):
    """Test malformed values surface as InvalidConfigError."""
    with pytest.raises(InvalidConfigError):
        load_cluster_config(**overrides)


def test_invalid_environment_value(monkeypatch):
    monkeypatch.setenv("DFS_REPLICATION_FACTOR", "three")

    with pytest.raises(InvalidConfigError):
        load_cluster_config()


def test_storage_root_coerced_to_path():
    config = ClusterConfig(storage_root="some/dir")

    assert config.storage_root == Path("some/dir")
