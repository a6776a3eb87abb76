"""Shared pytest fixtures for all tests."""

from pathlib import Path

import pytest

from coordinator.config import ClusterConfig
from coordinator.replication_coordinator import ReplicationCoordinator
from nodestore.node_storage import LocalNodeStorage


class FaultyNodeStorage(LocalNodeStorage):
    """
    LocalNodeStorage that raises OSError for chosen operations on chosen nodes.

    Every call is recorded as (operation, node directory name).
    """

    def __init__(self):
        self.failing = {"store": set(), "fetch": set(), "remove": set()}
        self.calls = []

    def fail_on(self, operation: str, node_id: int) -> None:
        self.failing[operation].add(f"node_{node_id}")

    def heal(self) -> None:
        for nodes in self.failing.values():
            nodes.clear()

    def _record(self, operation: str, location: Path) -> None:
        self.calls.append((operation, location.name))
        if location.name in self.failing[operation]:
            raise OSError(f"simulated {operation} failure on {location.name}")

    def store_object_at(self, location: Path, key: str, data: bytes) -> None:
        self._record("store", location)
        super().store_object_at(location, key, data)

    def fetch_object_from(self, location: Path, key: str) -> bytes:
        self._record("fetch", location)
        return super().fetch_object_from(location, key)

    def remove_object_from(self, location: Path, key: str) -> bool:
        self._record("remove", location)
        return super().remove_object_from(location, key)


@pytest.fixture
def storage_root(tmp_path):
    """
    Directory holding the node_<id> directories of the test cluster.
    """
    root = tmp_path / 'cluster'
    root.mkdir()
    return root


@pytest.fixture
def storage():
    return FaultyNodeStorage()


@pytest.fixture
def coordinator(storage_root, storage):
    """
    Four node cluster with replication factor 3 backed by FaultyNodeStorage.
    """
    config = ClusterConfig(node_count=4, replication_factor=3, storage_root=storage_root)
    return ReplicationCoordinator.from_config(config, storage=storage)


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'a.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def multiple_sample_files(tmp_path):
    """
    Create multiple sample files for testing listing order.

    Returns:
        List of Paths to sample files
    """
    files = []
    for name in ('c.txt', 'a.txt', 'b.txt'):
        file_path = tmp_path / name
        file_path.write_text(f'Sample content {name}')
        files.append(file_path)
    return files


@pytest.fixture
def copy_path(storage_root):
    """
    Returns a function giving the path of the physical copy of a key on a node.
    """
    def _copy_path(node_id: int, key: str) -> Path:
        return storage_root / f"node_{node_id}" / key
    return _copy_path
