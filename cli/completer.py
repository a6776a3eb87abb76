"""Custom completer for the DFS shell with file, key and node id autocompletion."""

from pathlib import Path
from typing import Callable, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS


class DFSCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local file completion for 'upload' from the working directory
    - Stored key completion for 'download' and 'delete'
    - Node id completion for 'fail' and 'recover'
    """

    def __init__(
        self,
        key_source: Callable[[], Iterable[str]],
        node_id_source: Callable[[], Iterable[int]],
    ):
        """
        Args:
            key_source: Returns the file keys currently stored
            node_id_source: Returns the node ids of the cluster
        """
        self.key_source = key_source
        self.node_id_source = node_id_source

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.

        Only the first argument of a command is completed.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        argument_index = len(tokens) - 1 if not is_typing_new_token else len(tokens)
        if argument_index != 1:
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]

        if command == "upload":
            yield from self._complete_local_files(current_word)
        elif command in ("download", "delete"):
            yield from self._complete_from(current_word, self.key_source())
        elif command in ("fail", "recover"):
            yield from self._complete_from(
                current_word, (str(node_id) for node_id in self.node_id_source())
            )

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_from(self, partial: str, candidates: Iterable[str]) -> Iterable[Completion]:
        for candidate in candidates:
            if candidate.startswith(partial):
                yield Completion(candidate, start_position=-len(partial))

    def _complete_local_files(self, partial: str) -> Iterable[Completion]:
        """
        Complete file names from the working directory.

        Only regular files are offered; node_<id> directories are skipped.
        """
        cwd = Path.cwd()
        names = sorted(item.name for item in cwd.iterdir() if item.is_file())
        yield from self._complete_from(partial, names)
