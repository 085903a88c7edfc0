"""
Structured logging shared by every module.

One line per entry:
<RunId>|<Date>|<Time>|<Level>|<File:Line>|<Module.Func>|<ModulePurpose>|<Detail>|<NextStep>|<END>

Usage:
    logger = get_logger(__name__)
    logger.warning("Tag update failed", extra={"next_step": "continue batch"})
"""
from __future__ import annotations

import datetime
import logging
import uuid
from typing import Dict

from .config import get_log_level

RUN_ID: str = uuid.uuid4().hex[:8]


class StructuredFormatter(logging.Formatter):
    """Emit a single '|' separated line per record."""

    MODULE_PURPOSES: Dict[str, str] = {
        "app": "HTTP API over recipes, preferences and tags",
        "crud": "SQLAlchemy persistence for recipes and user preferences",
        "filtering": "Hide recipes conflicting with excluded ingredients",
        "matching": "Decide whether an ingredient matches an excluded preference",
        "tagging": "Infer and backfill descriptive recipe tags",
        "stores": "Recipe and preference store adapters",
        "main": "Command line recipe listing",
        "import_data": "Import recipes from JSON into the database",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        dt = datetime.datetime.fromtimestamp(record.created)
        run_id = getattr(record, "run_id", RUN_ID)
        module_purpose = self.MODULE_PURPOSES.get(record.module, "")
        next_step = getattr(record, "next_step", "")
        line = (
            f"{run_id}|{dt:%Y-%m-%d}|{dt:%H:%M:%S}|{record.levelname}|"
            f"{record.filename}:{record.lineno}|{record.module}.{record.funcName}|"
            f"{module_purpose}|{record.getMessage()}|{next_step}|<END>"
        )
        if record.exc_info:
            line = f"{line} | EXC={self.formatException(record.exc_info)}"
        return line


def init_logging(level: int | None = None) -> None:
    """
    Attach the structured handler to the package logger once.

    Repeated calls are no-ops so importing modules in a REPL or under pytest
    does not stack handlers.
    """
    package_logger = logging.getLogger("przepisy")
    if package_logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    package_logger.addHandler(handler)
    package_logger.setLevel(level if level is not None else get_log_level())


def get_logger(name: str) -> logging.Logger:
    init_logging()
    return logging.getLogger(name)
