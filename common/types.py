"""Shared data type definitions (NodeStatus, ReplicaSet, operation results)."""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class NodeStatus:
    """
    Point-in-time view of a storage node, used for status reporting.
    """
    node_id: int
    active: bool
    location: Path


@dataclass(frozen=True)
class ReplicaSet:
    """
    Ordered node ids holding a copy of a file, in placement order.
    """
    key: str
    node_ids: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.node_ids)


@dataclass(frozen=True)
class LowReplicaWarning:
    """
    Emitted by the health audit for a file at risk of data loss.
    """
    key: str
    active_count: int


@dataclass(frozen=True)
class UploadResult:
    key: str
    node_ids: Tuple[int, ...]
    size: int


@dataclass(frozen=True)
class DownloadResult:
    key: str
    node_id: int
    data: bytes
