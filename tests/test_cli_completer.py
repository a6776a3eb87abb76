"""Tests for DFSCompleter."""

from pathlib import Path
from unittest.mock import patch

import pytest
from prompt_toolkit.document import Document

from cli.completer import DFSCompleter
from cli.constants import COMMANDS


@pytest.fixture
def completer():
    """Create a DFSCompleter with two stored keys and four nodes."""
    return DFSCompleter(
        key_source=lambda: ["alpha.txt", "beta.txt"],
        node_id_source=lambda: [1, 2, 3, 4],
    )


@pytest.fixture
def working_dir(tmp_path):
    """
    Create a working directory with local files and a node directory.

    Returns:
        Path to the temporary working directory
    """
    (tmp_path / "report.txt").write_text("content")
    (tmp_path / "data.csv").write_text("content")
    (tmp_path / "node_1").mkdir()
    return tmp_path


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_shows_all_commands(self, completer):
        completions = get_completions_list(completer, "")
        for cmd in COMMANDS:
            assert cmd in completions

    def test_partial_command_filters(self, completer):
        completions = get_completions_list(completer, "d")
        assert completions == ["download", "delete"]

    def test_command_completion_case_insensitive(self, completer):
        assert get_completions_list(completer, "UP") == ["upload"]


class TestArgumentCompletion:
    """Tests for per-command argument completion."""

    def test_upload_shows_local_files_only(self, completer, working_dir):
        with patch.object(Path, "cwd", return_value=working_dir):
            completions = get_completions_list(completer, "upload ")
        assert completions == ["data.csv", "report.txt"]

    def test_upload_filters_partial_name(self, completer, working_dir):
        with patch.object(Path, "cwd", return_value=working_dir):
            assert get_completions_list(completer, "upload re") == ["report.txt"]

    def test_download_shows_stored_keys(self, completer):
        assert get_completions_list(completer, "download ") == ["alpha.txt", "beta.txt"]

    def test_delete_filters_stored_keys(self, completer):
        assert get_completions_list(completer, "delete b") == ["beta.txt"]

    def test_fail_shows_node_ids(self, completer):
        assert get_completions_list(completer, "fail ") == ["1", "2", "3", "4"]

    def test_recover_filters_node_ids(self, completer):
        assert get_completions_list(completer, "recover 3") == ["3"]

    def test_no_completion_after_first_argument(self, completer):
        assert get_completions_list(completer, "download alpha.txt ") == []

    def test_no_completion_for_argumentless_commands(self, completer):
        assert get_completions_list(completer, "nodes ") == []

    def test_start_position_replaces_partial_word(self, completer):
        doc = Document("delete al", len("delete al"))
        completion = next(completer.get_completions(doc, None))
        assert completion.start_position == -2
