"""Sub-command implementations for the shelfkeeper CLI."""

from __future__ import annotations

import json

from .. import logging_manager as log_mgr
from ..database.engine import create_schema
from ..reading import ProgressMaintenance, SeriesNotFoundError, build_reader_service

LOGGER = log_mgr.get_logger().getChild("cli.commands")


def execute_maintenance_command(args) -> int:
    """Run one maintenance pass, or all of them in order."""

    maintenance = ProgressMaintenance()
    step = getattr(args, "step", "all") or "all"

    if step == "consolidate":
        summary = {"consolidated": maintenance.consolidate_progress()}
    elif step == "cap":
        summary = {"capped": maintenance.ensure_chapter_progress_is_capped()}
    elif step == "cleanup":
        report = maintenance.cleanup_db_entries()
        summary = {
            "orphaned_progress": report.orphaned_progress,
            "removed_collections": report.removed_collections,
            "removed_genres": report.removed_genres,
        }
    else:
        summary = maintenance.run_all().as_dict()

    log_mgr.console_info(
        "Maintenance (%s) finished: %s",
        step,
        ", ".join(f"{key}={value}" for key, value in summary.items()),
        logger_obj=LOGGER,
    )
    return 0


def execute_continue_point_command(args) -> int:
    service = build_reader_service()
    try:
        chapter = service.get_continue_point(args.series_id, args.user_id)
    except SeriesNotFoundError as exc:
        log_mgr.console_error(str(exc), logger_obj=LOGGER)
        return 1
    print(json.dumps(chapter.model_dump(), sort_keys=True))
    return 0


def execute_init_db_command(args) -> int:
    create_schema()
    log_mgr.console_info("Database schema is up to date.", logger_obj=LOGGER)
    return 0


__all__ = [
    "execute_continue_point_command",
    "execute_init_db_command",
    "execute_maintenance_command",
]
