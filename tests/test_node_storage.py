"""Tests for the local node storage collaborator."""

import pytest

from nodestore.node_storage import LocalNodeStorage


@pytest.fixture
def node_storage():
    return LocalNodeStorage()


@pytest.fixture
def location(tmp_path):
    return tmp_path / "node_1"


def test_store_creates_node_directory(node_storage, location):
    node_storage.store_object_at(location, "a.txt", b"data")

    assert location.is_dir()
    assert (location / "a.txt").read_bytes() == b"data"


def test_store_overwrites_existing_copy(node_storage, location):
    node_storage.store_object_at(location, "a.txt", b"old")
    node_storage.store_object_at(location, "a.txt", b"new")

    assert node_storage.fetch_object_from(location, "a.txt") == b"new"


def test_fetch_missing_raises_file_not_found(node_storage, location):
    node_storage.ensure_location(location)

    with pytest.raises(FileNotFoundError):
        node_storage.fetch_object_from(location, "missing.txt")


def test_remove_reports_whether_copy_existed(node_storage, location):
    node_storage.store_object_at(location, "a.txt", b"data")

    assert node_storage.remove_object_from(location, "a.txt") is True
    assert node_storage.remove_object_from(location, "a.txt") is False
    assert not node_storage.object_exists(location, "a.txt")


def test_list_objects(node_storage, location):
    assert node_storage.list_objects(location) == []

    node_storage.store_object_at(location, "b.txt", b"b")
    node_storage.store_object_at(location, "a.txt", b"a")

    assert node_storage.list_objects(location) == ["a.txt", "b.txt"]


def test_ensure_location_is_idempotent(node_storage, location):
    node_storage.ensure_location(location)
    node_storage.ensure_location(location)

    assert location.is_dir()
