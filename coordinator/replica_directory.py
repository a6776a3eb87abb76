"""Replica directory: which nodes hold a copy of each file."""

import os
from pathlib import PurePath
from typing import Dict, Iterable, Iterator, Optional

from common.types import ReplicaSet
from coordinator.exceptions import FileKeyNotFoundError, InvalidFileKeyError
from coordinator.node_registry import NodeRegistry

_SEPARATORS = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())


def validate_key(key: str) -> str:
    """
    Check that a key names a single file inside a node directory.

    Rejects empty keys, absolute paths, path separators, "." and "..".

    Raises:
        InvalidFileKeyError: If the key could resolve outside the node directory
    """
    if (
        not key
        or key in (".", "..")
        or PurePath(key).is_absolute()
        or any(sep in key for sep in _SEPARATORS)
    ):
        raise InvalidFileKeyError(key)
    return key


class ReplicaDirectory:
    """
    In-memory mapping from file key to its ReplicaSet.

    Node ids are validated against the registry on registration. Iteration
    is ordered by key, which is also the order of file listings.
    """

    def __init__(self, registry: NodeRegistry):
        self._registry = registry
        self._entries: Dict[str, ReplicaSet] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def put(self, key: str, node_ids: Iterable[int]) -> ReplicaSet:
        """
        Register the replica set for a key, replacing any previous one.

        Raises:
            NodeNotFoundError: If a node id is not part of the cluster
        """
        validate_key(key)
        node_ids = tuple(node_ids)
        for node_id in node_ids:
            self._registry.get(node_id)

        replica_set = ReplicaSet(key=key, node_ids=node_ids)
        self._entries[key] = replica_set
        return replica_set

    def find(self, key: str) -> Optional[ReplicaSet]:
        return self._entries.get(key)

    def get(self, key: str) -> ReplicaSet:
        replica_set = self._entries.get(key)
        if replica_set is None:
            raise FileKeyNotFoundError(key)
        return replica_set

    def remove(self, key: str) -> ReplicaSet:
        """Drop a key and return the replica set it had"""
        try:
            return self._entries.pop(key)
        except KeyError:
            raise FileKeyNotFoundError(key) from None

    def keys(self) -> Iterator[str]:
        for key in sorted(self._entries):
            yield key

    def entries(self) -> Iterator[ReplicaSet]:
        for key in self.keys():
            yield self._entries[key]
