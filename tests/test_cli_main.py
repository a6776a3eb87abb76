"""Tests for the CLI entry point."""

import io
import logging

import pytest

from cli import main as cli_main


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli_main, "setup_logging", lambda name, log_level=None: logging.getLogger(name))
    for name in ("DFS_NODE_COUNT", "DFS_REPLICATION_FACTOR", "DFS_STORAGE_ROOT"):
        monkeypatch.delenv(name, raising=False)


def test_piped_stdin_runs_commands(tmp_path, monkeypatch, capsys):
    """Test non-interactive input is processed line by line."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_text("hello")
    monkeypatch.setattr("sys.stdin", io.StringIO("upload a.txt\nlist\nexit\n"))

    exit_code = cli_main.main(["--storage-root", str(tmp_path / "cluster")])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "[UPLOAD SUCCESS] File replicated to nodes: 1 2 3" in out
    assert " - a.txt → Nodes: 1 2 3" in out
    assert (tmp_path / "cluster" / "node_3" / "a.txt").read_text() == "hello"


def test_cluster_flags(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("nodes\n"))

    cli_main.main(["--nodes", "2", "--replication-factor", "1"])

    out = capsys.readouterr().out
    assert "Node 2: Active" in out
    assert "Node 3" not in out


def test_invalid_cluster_shape_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert cli_main.main(["--nodes", "2", "--replication-factor", "3"]) == 2
