"""Manages physical object files inside node directories: store, fetch, remove."""

from pathlib import Path
from typing import List

from common.logging_config import get_logger

logger = get_logger(__name__)


class LocalNodeStorage:
    """
    Storage collaborator backed by one local directory per node.

    A node's location is the directory path assigned by the registry; an
    object is a file named after its key inside that directory.
    """

    def ensure_location(self, location: Path) -> None:
        """Ensure a node directory exists."""
        location.mkdir(parents=True, exist_ok=True)

    def get_object_path(self, location: Path, key: str) -> Path:
        """
        Get file path for an object on a node.

        Args:
            location: Node directory
            key: File key

        Returns:
            Path object for the stored copy
        """
        return location / key

    def store_object_at(self, location: Path, key: str, data: bytes) -> None:
        """
        Write an object to a node, replacing any existing copy.

        Raises:
            OSError: If write operation fails
        """
        self.ensure_location(location)
        filepath = self.get_object_path(location, key)
        filepath.write_bytes(data)
        logger.debug(f"Stored {len(data)} bytes at {filepath}")

    def fetch_object_from(self, location: Path, key: str) -> bytes:
        """
        Read an object from a node.

        Raises:
            FileNotFoundError: If the node holds no copy of the object
            OSError: If read operation fails
        """
        filepath = self.get_object_path(location, key)
        return filepath.read_bytes()

    def remove_object_from(self, location: Path, key: str) -> bool:
        """
        Delete an object from a node.

        Returns:
            True if the copy was deleted, False if it didn't exist

        Raises:
            OSError: If the copy exists but cannot be removed
        """
        filepath = self.get_object_path(location, key)
        if filepath.exists():
            filepath.unlink()
            return True
        return False

    def object_exists(self, location: Path, key: str) -> bool:
        return self.get_object_path(location, key).is_file()

    def list_objects(self, location: Path) -> List[str]:
        """
        List all object keys stored on a node.

        Returns:
            Sorted list of keys
        """
        if not location.exists():
            return []
        return sorted(p.name for p in location.iterdir() if p.is_file())
