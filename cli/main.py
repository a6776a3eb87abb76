"""CLI entry point."""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from common.logging_config import setup_logging
from coordinator.config import load_cluster_config
from coordinator.exceptions import InvalidConfigError
from coordinator.replication_coordinator import ReplicationCoordinator
from cli.repl import repl_loop, run_lines


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dfs-sim",
        description="Replicated file store simulator",
    )
    parser.add_argument("--nodes", type=int, default=None,
                        help="Total number of storage nodes (env DFS_NODE_COUNT, default 4)")
    parser.add_argument("--replication-factor", type=int, default=None,
                        help="Copies kept per file (env DFS_REPLICATION_FACTOR, default 3)")
    parser.add_argument("--storage-root", type=Path, default=None,
                        help="Directory holding the node_<id> directories (env DFS_STORAGE_ROOT)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for CLI."""
    args = build_arg_parser().parse_args(argv)
    log_level = 'DEBUG' if args.debug else os.getenv('LOG_LEVEL', 'INFO')

    logger = setup_logging('cli', log_level=log_level)

    if args.debug:
        logger.info("Debug logging enabled")

    try:
        config = load_cluster_config(
            node_count=args.nodes,
            replication_factor=args.replication_factor,
            storage_root=args.storage_root,
        )
        coordinator = ReplicationCoordinator.from_config(config)
    except InvalidConfigError as e:
        logger.error(str(e))
        return 2

    logger.info("CLI starting...")
    try:
        if sys.stdin.isatty():
            repl_loop(coordinator)
        else:
            run_lines(sys.stdin, coordinator)
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
