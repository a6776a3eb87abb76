"""Custom exception classes for the replication coordinator."""


class DFSException(Exception):
    """
    Base exception class for all DFS-related errors.
    """
    pass


class InvalidConfigError(DFSException):
    """
    Raised when the cluster configuration cannot hold the replication factor.
    """
    pass


class SourceNotFoundError(DFSException):
    """
    Raised when the local file given to upload does not exist.
    """
    pass


class FileKeyNotFoundError(DFSException):
    """
    Raised when a requested file key is not in the replica directory.
    """

    def __init__(self, key: str):
        super().__init__(f"File '{key}' not found in DFS")
        self.key = key


class NodeNotFoundError(DFSException):
    """
    Raised when a node id is outside the configured cluster.
    """

    def __init__(self, node_id: int):
        super().__init__(f"Invalid node ID {node_id}")
        self.node_id = node_id


class InsufficientReplicasError(DFSException):
    """
    Raised when there are not enough active nodes to place every replica.
    """

    def __init__(self, required: int, available: int):
        super().__init__(
            f"Not enough active nodes for {required} replicas ({available} active)"
        )
        self.required = required
        self.available = available


class AllReplicasUnavailableError(DFSException):
    """
    Raised when no replica of a file is both active and readable.
    """

    def __init__(self, key: str):
        super().__init__(f"All replicas of '{key}' are unavailable")
        self.key = key


class ReplicationIOError(DFSException):
    """
    Raised when the node storage fails in the middle of an operation.
    """

    def __init__(self, operation: str, key: str, node_id: int, reason: str):
        super().__init__(f"{operation} of '{key}' failed on node {node_id}: {reason}")
        self.operation = operation
        self.key = key
        self.node_id = node_id


class InvalidFileKeyError(DFSException):
    """
    Raised when a file key cannot be used as a file name inside a node directory.
    """

    def __init__(self, key: str):
        super().__init__(f"Invalid file key: {key!r}")
        self.key = key
