"""Replication coordinator: placement, replica reads, fan-out deletes and health audits."""

import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from common.constants import DEFAULT_REPLICATION_FACTOR, LOW_REPLICA_THRESHOLD
from common.logging_config import get_logger
from common.types import (
    DownloadResult,
    LowReplicaWarning,
    NodeStatus,
    ReplicaSet,
    UploadResult,
)
from coordinator.config import ClusterConfig
from coordinator.exceptions import (
    AllReplicasUnavailableError,
    InsufficientReplicasError,
    InvalidConfigError,
    ReplicationIOError,
    SourceNotFoundError,
)
from coordinator.node_registry import NodeRegistry
from coordinator.replica_directory import ReplicaDirectory, validate_key
from coordinator.replica_health import ReplicaHealthAuditor
from nodestore.node_storage import LocalNodeStorage

logger = get_logger(__name__)


class ReplicationCoordinator:
    """
    Owns the cluster state and drives every file operation through it.

    Placement scans active nodes in ascending id order and commits a replica
    set only when every copy was written. Reads prefer replicas in the order
    they were placed. All public operations are serialised on one lock.
    """

    def __init__(
        self,
        registry: NodeRegistry,
        directory: ReplicaDirectory,
        storage: LocalNodeStorage,
        replication_factor: int = DEFAULT_REPLICATION_FACTOR,
        low_replica_threshold: int = LOW_REPLICA_THRESHOLD
    ):
        """
        Args:
            registry: Fixed node pool
            directory: Replica directory bound to the same registry
            storage: Storage collaborator used for every object read/write
            replication_factor: Copies kept per file (default 3)
            low_replica_threshold: Active copies below which the audit warns (default 2)

        Raises:
            InvalidConfigError: If the cluster is smaller than the replication factor
        """
        if replication_factor < 1:
            raise InvalidConfigError(
                f"Replication factor must be positive, got {replication_factor}"
            )
        if len(registry) < replication_factor:
            raise InvalidConfigError(
                f"{len(registry)} nodes cannot hold {replication_factor} replicas"
            )

        self.registry = registry
        self.directory = directory
        self.storage = storage
        self.replication_factor = replication_factor
        self.auditor = ReplicaHealthAuditor(registry, directory, threshold=low_replica_threshold)
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config: ClusterConfig,
        storage: Optional[LocalNodeStorage] = None
    ) -> "ReplicationCoordinator":
        """Build a cluster from configuration and create every node directory."""
        registry = NodeRegistry(config.node_count, config.storage_root)
        directory = ReplicaDirectory(registry)
        storage = storage if storage is not None else LocalNodeStorage()

        coordinator = cls(
            registry,
            directory,
            storage,
            replication_factor=config.replication_factor,
            low_replica_threshold=config.low_replica_threshold,
        )

        for node in registry.all():
            storage.ensure_location(node.location)

        logger.info(
            f"[DFS] Initialized with {config.node_count} nodes "
            f"(replication factor {config.replication_factor}, root {config.storage_root})"
        )
        return coordinator

    def upload(self, key: str, source: Union[str, Path]) -> UploadResult:
        """
        Replicate a local file to the first active nodes in id order.

        Args:
            key: File key the copies are stored under
            source: Local path of the file to upload

        Returns:
            UploadResult with the node ids holding the new replicas

        Raises:
            InvalidFileKeyError: If the key is not a plain file name
            SourceNotFoundError: If the source file does not exist
            InsufficientReplicasError: If fewer active nodes than the replication factor
            ReplicationIOError: If a node read or write fails; nothing is committed
                and nodes holding the previous version get their old bytes back
        """
        validate_key(key)

        source = Path(source)
        if not source.is_file():
            raise SourceNotFoundError(f"Source file not found: {source}")

        try:
            data = source.read_bytes()
        except OSError as e:
            raise SourceNotFoundError(f"Cannot read source file {source}: {e}") from e

        with self._lock:
            active_ids = self.registry.active_node_ids()
            if len(active_ids) < self.replication_factor:
                logger.warning(
                    f"Rejected upload of '{key}': {len(active_ids)} active nodes, "
                    f"{self.replication_factor} replicas required"
                )
                raise InsufficientReplicasError(self.replication_factor, len(active_ids))

            previous = self.directory.find(key)
            staged = self._stage_copies("upload", key, previous.node_ids) if previous else {}
            written: List[int] = []

            for node_id in active_ids:
                node = self.registry.get(node_id)
                try:
                    self.storage.store_object_at(node.location, key, data)
                except OSError as e:
                    logger.error(f"Upload of '{key}' aborted: write to node {node_id} failed: {e}")
                    attempted = written + [node_id]
                    self._discard_copies(key, [n for n in attempted if n not in staged])
                    self._restore_copies(key, {n: staged[n] for n in attempted if n in staged})
                    raise ReplicationIOError("upload", key, node_id, str(e)) from e

                written.append(node_id)
                if len(written) == self.replication_factor:
                    break

            replica_set = self.directory.put(key, written)

            if previous is not None:
                self._discard_copies(key, [n for n in previous.node_ids if n not in written])

        logger.info(f"[UPLOAD SUCCESS] '{key}' replicated to nodes {list(replica_set.node_ids)}")
        return UploadResult(key=key, node_ids=replica_set.node_ids, size=len(data))

    def download(self, key: str) -> DownloadResult:
        """
        Read a file from the first live replica in placement order.

        Inactive nodes and nodes missing their copy are skipped; any other
        read failure aborts the download instead of moving to the next replica.

        Raises:
            FileKeyNotFoundError: If the key is unknown
            ReplicationIOError: If reading an active replica fails
            AllReplicasUnavailableError: If no replica is active and readable
        """
        with self._lock:
            replica_set = self.directory.get(key)

            for node_id in replica_set.node_ids:
                node = self.registry.get(node_id)
                if not node.active:
                    logger.debug(f"Skipping replica of '{key}' on failed node {node_id}")
                    continue

                try:
                    data = self.storage.fetch_object_from(node.location, key)
                except FileNotFoundError:
                    logger.warning(f"Replica of '{key}' missing on node {node_id}")
                    continue
                except OSError as e:
                    logger.error(f"Download of '{key}' aborted: read from node {node_id} failed: {e}")
                    raise ReplicationIOError("download", key, node_id, str(e)) from e

                logger.info(f"[DOWNLOAD SUCCESS] '{key}' read from node {node_id}")
                return DownloadResult(key=key, node_id=node_id, data=data)

        logger.error(f"All replicas of '{key}' are unavailable")
        raise AllReplicasUnavailableError(key)

    def delete(self, key: str) -> ReplicaSet:
        """
        Remove a file from every node in its replica set, live or not.

        Either every copy and the directory entry are gone, or on failure
        the entry stays and removed copies are written back.

        Raises:
            FileKeyNotFoundError: If the key is unknown
            ReplicationIOError: If a node cannot be read or cleaned
        """
        with self._lock:
            replica_set = self.directory.get(key)

            staged = self._stage_copies("delete", key, replica_set.node_ids)

            removed: List[int] = []
            for node_id in replica_set.node_ids:
                node = self.registry.get(node_id)
                try:
                    self.storage.remove_object_from(node.location, key)
                except OSError as e:
                    logger.error(f"Delete of '{key}' aborted: removal on node {node_id} failed: {e}")
                    self._restore_copies(key, {n: staged[n] for n in removed})
                    raise ReplicationIOError("delete", key, node_id, str(e)) from e
                if node_id in staged:
                    removed.append(node_id)

            self.directory.remove(key)

        logger.info(f"[DELETE SUCCESS] '{key}' removed from nodes {list(replica_set.node_ids)}")
        return replica_set

    def fail_node(self, node_id: int) -> List[LowReplicaWarning]:
        """Mark a node failed and return the resulting health audit"""
        with self._lock:
            self.registry.mark_failed(node_id)
            return self.check_replica_health()

    def recover_node(self, node_id: int) -> List[LowReplicaWarning]:
        """Mark a node active again and return the resulting health audit"""
        with self._lock:
            self.registry.mark_recovered(node_id)
            return self.check_replica_health()

    def check_replica_health(self) -> List[LowReplicaWarning]:
        with self._lock:
            return self.auditor.check()

    def list_files(self) -> List[ReplicaSet]:
        """All stored files with their replica sets, ordered by key"""
        with self._lock:
            return list(self.directory.entries())

    def known_keys(self) -> List[str]:
        with self._lock:
            return list(self.directory.keys())

    def show_nodes(self) -> List[NodeStatus]:
        with self._lock:
            return self.registry.all()

    def _stage_copies(self, operation: str, key: str, node_ids: Iterable[int]) -> Dict[int, bytes]:
        """
        Read the current copy of a key from each node, live or not.

        Nodes without a copy are left out of the result.

        Raises:
            ReplicationIOError: If a node holding a copy cannot be read
        """
        staged: Dict[int, bytes] = {}
        for node_id in node_ids:
            node = self.registry.get(node_id)
            try:
                staged[node_id] = self.storage.fetch_object_from(node.location, key)
            except FileNotFoundError:
                logger.debug(f"No copy of '{key}' on node {node_id} to stage")
            except OSError as e:
                logger.error(f"{operation.capitalize()} of '{key}' aborted: node {node_id} unreadable: {e}")
                raise ReplicationIOError(operation, key, node_id, str(e)) from e
        return staged

    def _discard_copies(self, key: str, node_ids: Iterable[int]) -> None:
        """Best-effort removal of copies that no replica set refers to"""
        for node_id in node_ids:
            node = self.registry.get(node_id)
            try:
                self.storage.remove_object_from(node.location, key)
                logger.debug(f"Discarded stray copy of '{key}' on node {node_id}")
            except OSError as e:
                logger.warning(f"Could not discard stray copy of '{key}' on node {node_id}: {e}")

    def _restore_copies(self, key: str, copies: Dict[int, bytes]) -> None:
        """Write back staged copies after an aborted upload or delete"""
        for node_id, data in copies.items():
            node = self.registry.get(node_id)
            try:
                self.storage.store_object_at(node.location, key, data)
                logger.info(f"Restored copy of '{key}' on node {node_id}")
            except OSError as e:
                logger.error(f"Could not restore copy of '{key}' on node {node_id}: {e}")
