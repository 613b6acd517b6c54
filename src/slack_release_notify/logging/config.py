# -*- coding: utf-8 -*-
"""structlog setup for a single Actions step run (optionally exported to Logfire)."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import logfire
import structlog
from structlog.types import EventDict, Processor

from slack_release_notify.config import Settings, get_settings

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}


def _run_context(settings: Settings) -> Processor:
    """Processor stamping every event with the app and the run it belongs to."""
    static: dict[str, Any] = {
        "app_name": settings.app.app_name,
        "environment": settings.app.environment,
        "repository": settings.inputs.repository or None,
        "notify_type": settings.inputs.notify_type or None,
    }
    if settings.app.service_version:
        static["service_version"] = settings.app.service_version

    def add_run_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict.setdefault(
            "logger", getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        for key, value in static.items():
            if value is not None:
                event_dict.setdefault(key, value)
        return event_dict

    return add_run_context


def _console_level(settings: Settings) -> int:
    # RUNNER_DEBUG=1 is set when a workflow is re-run with debug logging.
    if settings.logging.runner_debug:
        return logging.DEBUG
    return getattr(logging, settings.logging.console_level, logging.INFO)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog (and Logfire when enabled) for this run.

    Console logs go to stderr; stdout is reserved for workflow commands such as
    ``::error::``. The file handler, when enabled, always receives JSON lines.
    """
    settings = settings or get_settings()
    log_settings = settings.logging

    handlers: list[logging.Handler] = []
    if log_settings.log_to_console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(_console_level(settings))
        handlers.append(console)
    if log_settings.log_to_file:
        path = Path(log_settings.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(getattr(logging, log_settings.file_level, logging.INFO))
        handlers.append(file_handler)
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))

    if handlers:
        logging.basicConfig(
            level=min(h.level for h in handlers), handlers=handlers, force=True
        )
    # aiohttp logs every connection at DEBUG
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    if log_settings.logfire_enabled:
        logfire.configure(
            token=log_settings.logfire_token,
            service_name=settings.app.service_name or settings.app.app_name,
            service_version=settings.app.service_version,
            min_level=LOG_LEVEL_TO_LOGFIRE.get(log_settings.logfire_level, "info"),  # type: ignore[arg-type]
            environment=settings.app.environment,
            console=False,
        )

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _run_context(settings),
    ]
    if log_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if handlers:
        use_json = log_settings.log_to_file or log_settings.json_format
        processors.append(
            structlog.processors.JSONRenderer()
            if use_json
            # Actions log viewer does not render ANSI colours reliably.
            else structlog.dev.ConsoleRenderer(colors=False)
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
