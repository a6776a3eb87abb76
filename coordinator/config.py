"""Configuration settings for the simulated cluster."""

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from common.constants import (
    DEFAULT_NODE_COUNT,
    DEFAULT_REPLICATION_FACTOR,
    LOW_REPLICA_THRESHOLD,
)
from coordinator.exceptions import InvalidConfigError


class ClusterConfig(BaseModel):
    """Cluster shape and storage location for one coordinator."""

    node_count: int = Field(default=DEFAULT_NODE_COUNT, ge=1)
    replication_factor: int = Field(default=DEFAULT_REPLICATION_FACTOR, ge=1)
    storage_root: Path = Field(default_factory=Path.cwd)
    low_replica_threshold: int = Field(default=LOW_REPLICA_THRESHOLD, ge=0)


def _env_overrides() -> dict:
    env = {}
    if os.environ.get("DFS_NODE_COUNT"):
        env["node_count"] = os.environ["DFS_NODE_COUNT"]
    if os.environ.get("DFS_REPLICATION_FACTOR"):
        env["replication_factor"] = os.environ["DFS_REPLICATION_FACTOR"]
    if os.environ.get("DFS_STORAGE_ROOT"):
        env["storage_root"] = os.environ["DFS_STORAGE_ROOT"]
    if os.environ.get("DFS_LOW_REPLICA_THRESHOLD"):
        env["low_replica_threshold"] = os.environ["DFS_LOW_REPLICA_THRESHOLD"]
    return env


def load_cluster_config(**overrides: Optional[Any]) -> ClusterConfig:
    """
    Build the cluster configuration from DFS_* environment variables.

    Keyword overrides (typically CLI flags) win over the environment;
    overrides set to None are ignored.

    Raises:
        InvalidConfigError: If a value is malformed or out of range
    """
    values = _env_overrides()
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ClusterConfig(**values)
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid cluster configuration: {e}") from e
