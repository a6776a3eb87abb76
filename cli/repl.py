"""REPL with prompt_toolkit for operator interaction."""

import os
import sys
from typing import Callable, Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from common.logging_config import get_logger
from cli.commands import (
    handle_delete,
    handle_download,
    handle_fail,
    handle_list,
    handle_nodes,
    handle_recover,
    handle_upload,
)
from cli.completer import DFSCompleter
from cli.constants import (
    BANNER,
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    DeleteCommand,
    DownloadCommand,
    FailNodeCommand,
    ListCommand,
    NodesCommand,
    RecoverNodeCommand,
    UploadCommand,
)
from cli.parser import ParseError, parse_command
from coordinator.exceptions import DFSException
from coordinator.replication_coordinator import ReplicationCoordinator

logger = get_logger(__name__)


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(BANNER)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj, coordinator: ReplicationCoordinator) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, UploadCommand):
        return handle_upload(cmd_obj, coordinator)
    elif isinstance(cmd_obj, DownloadCommand):
        return handle_download(cmd_obj, coordinator)
    elif isinstance(cmd_obj, DeleteCommand):
        return handle_delete(cmd_obj, coordinator)
    elif isinstance(cmd_obj, ListCommand):
        return handle_list(cmd_obj, coordinator)
    elif isinstance(cmd_obj, FailNodeCommand):
        return handle_fail(cmd_obj, coordinator)
    elif isinstance(cmd_obj, RecoverNodeCommand):
        return handle_recover(cmd_obj, coordinator)
    elif isinstance(cmd_obj, NodesCommand):
        return handle_nodes(cmd_obj, coordinator)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def execute_line(user_input: str, coordinator: ReplicationCoordinator) -> str:
    """
    Parse and run one command line against the coordinator.

    Parse errors and coordinator errors are turned into 'Error: ...' text;
    the coordinator stays usable for the next command.
    """
    try:
        cmd_obj = parse_command(user_input)
        return dispatch_command(cmd_obj, coordinator)
    except ParseError as e:
        return f"Error: {e}"
    except DFSException as e:
        logger.debug(f"Command failed: {type(e).__name__}: {e}")
        return f"Error: {e}"


def run_lines(
    lines: Iterable[str],
    coordinator: ReplicationCoordinator,
    write: Callable[[str], None] = print,
) -> None:
    """
    Run commands from a non-interactive source (piped stdin, scripts).

    Stops at 'exit' or when the lines run out.
    """
    for line in lines:
        user_input = line.strip()
        if not user_input or user_input.startswith("#"):
            continue
        if user_input == "exit":
            break
        if user_input == "help":
            write(HELP_TEXT)
            continue
        if user_input == "clear":
            continue
        write(execute_line(user_input, coordinator))


def repl_loop(
    coordinator: ReplicationCoordinator,
    session: Optional[PromptSession] = None,
) -> None:
    """Start interactive REPL with prompt_toolkit."""
    if session is None:
        completer = DFSCompleter(
            key_source=coordinator.known_keys,
            node_id_source=lambda: [node.node_id for node in coordinator.show_nodes()],
        )
        session = PromptSession(
            completer=completer, history=InMemoryHistory(), style=STYLE
        )

    clear_screen()
    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_welcome()
                continue

            print(execute_line(user_input, coordinator))
            print()

        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
