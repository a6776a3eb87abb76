"""Command parser for CLI input."""

import shlex
from pathlib import Path

from coordinator.exceptions import InvalidFileKeyError
from coordinator.replica_directory import validate_key
from cli.models import (
    CommandRequest,
    DeleteCommand,
    DownloadCommand,
    FailNodeCommand,
    ListCommand,
    NodesCommand,
    RecoverNodeCommand,
    UploadCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of Upload/Download/Delete/List/Fail/Recover/Nodes)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0].lower()
    args = tokens[1:]

    if command_name == "upload":
        return _parse_upload(args)
    elif command_name == "download":
        return _parse_download(args)
    elif command_name == "delete":
        return DeleteCommand(key=_single_argument("delete", "<key>", args))
    elif command_name == "list":
        _no_arguments("list", args)
        return ListCommand()
    elif command_name == "fail":
        return FailNodeCommand(node_id=_parse_node_id("fail", args))
    elif command_name == "recover":
        return RecoverNodeCommand(node_id=_parse_node_id("recover", args))
    elif command_name == "nodes":
        _no_arguments("nodes", args)
        return NodesCommand()
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_upload(args: list[str]) -> UploadCommand:
    """Parse 'upload <path> [key]' command."""
    if len(args) not in (1, 2):
        raise ParseError("upload requires 1 or 2 arguments: <path> [key]")

    source = args[0]
    key = args[1] if len(args) > 1 else Path(source).name
    try:
        validate_key(key)
    except InvalidFileKeyError as e:
        raise ParseError(str(e))

    return UploadCommand(source=source, key=key)


def _parse_download(args: list[str]) -> DownloadCommand:
    """Parse 'download <key> [output_path]' command."""
    if len(args) not in (1, 2):
        raise ParseError("download requires 1 or 2 arguments: <key> [output_path]")

    key = args[0]
    output_path = args[1] if len(args) > 1 else None

    return DownloadCommand(key=key, output_path=output_path)


def _parse_node_id(command_name: str, args: list[str]) -> int:
    """Parse the single integer node id taken by fail/recover."""
    raw = _single_argument(command_name, "<nodeId>", args)
    try:
        return int(raw)
    except ValueError:
        raise ParseError(f"{command_name} expects an integer node id, got {raw!r}")


def _single_argument(command_name: str, placeholder: str, args: list[str]) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: {placeholder}")
    return args[0]


def _no_arguments(command_name: str, args: list[str]) -> None:
    if args:
        raise ParseError(f"{command_name} takes no arguments")
