"""Local-directory storage standing in for the disks of remote nodes."""

from nodestore.node_storage import LocalNodeStorage

__all__ = ["LocalNodeStorage"]
