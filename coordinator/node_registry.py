"""Registry for tracking storage nodes and their liveness."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from common.constants import NODE_DIRECTORY_PREFIX
from common.logging_config import get_logger
from common.types import NodeStatus
from coordinator.exceptions import InvalidConfigError, NodeNotFoundError

logger = get_logger(__name__)


@dataclass(eq=False)
class Node:
    """A storage node; only the liveness flag changes after creation."""

    node_id: int
    location: Path
    active: bool = True

    def fail(self) -> None:
        self.active = False

    def recover(self) -> None:
        self.active = True

    def snapshot(self) -> NodeStatus:
        return NodeStatus(node_id=self.node_id, active=self.active, location=self.location)


class NodeRegistry:
    """Fixed pool of storage nodes with ids 1..count"""

    def __init__(self, count: int, storage_root: Path):
        """
        Args:
            count: Total number of nodes in the cluster
            storage_root: Directory under which each node gets node_<id>/

        Raises:
            InvalidConfigError: If count is not positive
        """
        if count < 1:
            raise InvalidConfigError(f"Cluster needs at least one node, got {count}")

        self._nodes: Dict[int, Node] = {
            node_id: Node(
                node_id=node_id,
                location=Path(storage_root) / f"{NODE_DIRECTORY_PREFIX}{node_id}",
            )
            for node_id in range(1, count + 1)
        }

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def get(self, node_id: int) -> Node:
        """Get a node by id, raising NodeNotFoundError when out of range"""
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def mark_failed(self, node_id: int) -> None:
        """Mark node as failed; failing an already failed node is a no-op"""
        node = self.get(node_id)
        if not node.active:
            logger.debug(f"Node {node_id} already failed")
            return
        node.fail()
        logger.warning(f"Marked node {node_id} as failed")

    def mark_recovered(self, node_id: int) -> None:
        """Mark node as active again; recovering an active node is a no-op"""
        node = self.get(node_id)
        if node.active:
            logger.debug(f"Node {node_id} already active")
            return
        node.recover()
        logger.info(f"Marked node {node_id} as recovered")

    def is_active(self, node_id: int) -> bool:
        return self.get(node_id).active

    def active_node_ids(self) -> List[int]:
        """Ids of active nodes in ascending order, the placement candidate pool"""
        return [node_id for node_id, node in sorted(self._nodes.items()) if node.active]

    def all(self) -> List[NodeStatus]:
        """Snapshots of every node (including failed), ascending by id"""
        return [node.snapshot() for _, node in sorted(self._nodes.items())]
