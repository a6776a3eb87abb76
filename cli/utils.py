"""Utility functions for CLI output formatting."""

from typing import Iterable

from common.types import LowReplicaWarning


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def format_node_ids(node_ids: Iterable[int]) -> str:
    return " ".join(str(node_id) for node_id in node_ids)


def format_warning(warning: LowReplicaWarning) -> str:
    return (
        f"WARNING: File '{warning.key}' has only {warning.active_count} "
        f"active replicas! Data loss risk!"
    )
