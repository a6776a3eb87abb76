"""Replica health auditing after node failures and recoveries."""

from typing import List

from common.constants import LOW_REPLICA_THRESHOLD
from common.logging_config import get_logger
from common.types import LowReplicaWarning
from coordinator.node_registry import NodeRegistry
from coordinator.replica_directory import ReplicaDirectory

logger = get_logger(__name__)


class ReplicaHealthAuditor:
    """
    Reports files whose active replica count dropped below a threshold.

    The audit is a full read-only scan of the directory; it never changes
    node state or replica membership.
    """

    def __init__(
        self,
        registry: NodeRegistry,
        directory: ReplicaDirectory,
        threshold: int = LOW_REPLICA_THRESHOLD
    ):
        """
        Args:
            registry: Registry storing node liveness
            directory: Replica directory to scan
            threshold: Files with fewer active replicas than this are reported (default: 2)
        """
        self.registry = registry
        self.directory = directory
        self.threshold = threshold

    def active_replica_count(self, node_ids) -> int:
        return sum(1 for node_id in node_ids if self.registry.is_active(node_id))

    def check(self) -> List[LowReplicaWarning]:
        """Scan every file and return a warning for each under-replicated one"""
        warnings = []
        for replica_set in self.directory.entries():
            active_count = self.active_replica_count(replica_set.node_ids)
            if active_count < self.threshold:
                logger.warning(
                    f"File '{replica_set.key}' has only {active_count} active replicas! "
                    f"Data loss risk!"
                )
                warnings.append(LowReplicaWarning(key=replica_set.key, active_count=active_count))

        logger.debug(
            f"Replica health check complete: {len(warnings)}/{len(self.directory)} files at risk"
        )
        return warnings
