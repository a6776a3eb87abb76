"""Command handler functions for CLI operations."""

from pathlib import Path

from common.constants import DOWNLOAD_PREFIX
from common.logging_config import get_logger
from cli.models import (
    DeleteCommand,
    DownloadCommand,
    FailNodeCommand,
    ListCommand,
    NodesCommand,
    RecoverNodeCommand,
    UploadCommand,
)
from cli.utils import format_file_size, format_node_ids, format_warning
from coordinator.replication_coordinator import ReplicationCoordinator

logger = get_logger(__name__)


def handle_upload(cmd: UploadCommand, coordinator: ReplicationCoordinator) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with source path and key
        coordinator: Coordinator owning the cluster

    Returns:
        Success message with the nodes holding the replicas
    """
    logger.info(f"Executing upload command: source={cmd.source} key={cmd.key}")
    result = coordinator.upload(cmd.key, cmd.source)
    return (
        f"[UPLOAD SUCCESS] File replicated to nodes: {format_node_ids(result.node_ids)} "
        f"({format_file_size(result.size)})"
    )


def handle_download(cmd: DownloadCommand, coordinator: ReplicationCoordinator) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with key and optional output_path
        coordinator: Coordinator owning the cluster

    Returns:
        Success message naming the node the file was read from, or an error
        message if the local copy cannot be written
    """
    logger.info(f"Executing download command: key={cmd.key} output_path={cmd.output_path}")
    result = coordinator.download(cmd.key)

    destination = Path(cmd.output_path) if cmd.output_path else Path(f"{DOWNLOAD_PREFIX}{cmd.key}")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(result.data)
    except OSError as e:
        logger.error(f"Could not write {destination}: {e}")
        return f"Error: could not write {destination}: {e}"

    return f"[DOWNLOAD SUCCESS] File downloaded from Node {result.node_id} to {destination}"


def handle_delete(cmd: DeleteCommand, coordinator: ReplicationCoordinator) -> str:
    """Handle 'delete' command."""
    coordinator.delete(cmd.key)
    return "[DELETE SUCCESS] File removed from DFS."


def handle_list(cmd: ListCommand, coordinator: ReplicationCoordinator) -> str:
    """
    Handle 'list' command.

    Returns:
        Files ordered by key with the nodes holding each replica
    """
    files = coordinator.list_files()
    if not files:
        return "(Empty) No files stored."

    lines = ["FILES IN DFS:"]
    for replica_set in files:
        lines.append(f" - {replica_set.key} → Nodes: {format_node_ids(replica_set.node_ids)}")
    return "\n".join(lines)


def handle_fail(cmd: FailNodeCommand, coordinator: ReplicationCoordinator) -> str:
    """
    Handle 'fail' command.

    Returns:
        Node state change followed by any low-replica warnings
    """
    warnings = coordinator.fail_node(cmd.node_id)
    lines = [f"[NODE FAILED] Node {cmd.node_id} is inactive."]
    lines.extend(format_warning(w) for w in warnings)
    return "\n".join(lines)


def handle_recover(cmd: RecoverNodeCommand, coordinator: ReplicationCoordinator) -> str:
    """
    Handle 'recover' command.

    Returns:
        Node state change followed by any low-replica warnings still present
    """
    warnings = coordinator.recover_node(cmd.node_id)
    lines = [f"[NODE RECOVERED] Node {cmd.node_id} is active."]
    lines.extend(format_warning(w) for w in warnings)
    return "\n".join(lines)


def handle_nodes(cmd: NodesCommand, coordinator: ReplicationCoordinator) -> str:
    """Handle 'nodes' command."""
    lines = ["NODE STATUS:"]
    for node in coordinator.show_nodes():
        lines.append(f"Node {node.node_id}: {'Active' if node.active else 'Failed'}")
    return "\n".join(lines)
