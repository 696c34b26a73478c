"""Console-script entry point for shelfkeeper."""

from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

from .. import logging_manager as log_mgr
from ..config.loader import CONFIG_PATH_ENV, get_reader_config
from .args import parse_cli_args
from .commands import (
    execute_continue_point_command,
    execute_init_db_command,
    execute_maintenance_command,
)

_COMMANDS = {
    "maintenance": execute_maintenance_command,
    "continue-point": execute_continue_point_command,
    "init-db": execute_init_db_command,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the shelfkeeper CLI."""

    args = parse_cli_args(argv)
    if args.config_path:
        os.environ[CONFIG_PATH_ENV] = args.config_path
        get_reader_config.cache_clear()

    level = args.log_level or get_reader_config().log_level
    try:
        log_mgr.configure_logging_level(log_level=log_mgr.resolve_level(level))
    except ValueError as exc:
        log_mgr.console_error(str(exc))
        return 2

    return _COMMANDS[args.command](args)


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
