"""Replication coordinator for the simulated file store."""

from coordinator.config import ClusterConfig, load_cluster_config
from coordinator.node_registry import Node, NodeRegistry
from coordinator.replica_directory import ReplicaDirectory
from coordinator.replica_health import ReplicaHealthAuditor
from coordinator.replication_coordinator import ReplicationCoordinator

__all__ = [
    "ClusterConfig",
    "load_cluster_config",
    "Node",
    "NodeRegistry",
    "ReplicaDirectory",
    "ReplicaHealthAuditor",
    "ReplicationCoordinator",
]
