"""Project-wide constants (cluster defaults, node directory naming)."""

DEFAULT_NODE_COUNT: int = 4
DEFAULT_REPLICATION_FACTOR: int = 3

# Files with fewer active replicas than this are reported by the health audit.
LOW_REPLICA_THRESHOLD: int = 2

NODE_DIRECTORY_PREFIX: str = "node_"
DOWNLOAD_PREFIX: str = "downloaded_"
