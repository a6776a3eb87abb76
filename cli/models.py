"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class UploadCommand:
    """Replicate a local file into the cluster."""

    source: str
    key: str
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class DownloadCommand:
    """Download file by key."""

    key: str
    output_path: str | None = None
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a file from every replica node."""

    key: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class ListCommand:
    """List stored files and their replica sets."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class FailNodeCommand:
    """Mark a node as failed."""

    node_id: int
    command: Literal["fail"] = "fail"


@dataclass(frozen=True)
class RecoverNodeCommand:
    """Mark a node as active again."""

    node_id: int
    command: Literal["recover"] = "recover"


@dataclass(frozen=True)
class NodesCommand:
    """Show node status."""

    command: Literal["nodes"] = "nodes"


CommandRequest = (
    UploadCommand
    | DownloadCommand
    | DeleteCommand
    | ListCommand
    | FailNodeCommand
    | RecoverNodeCommand
    | NodesCommand
)
