# -*- coding: utf-8 -*-
"""
Entry point for the Slack release/deployment notifier.

Runs once per CI event: load settings, validate inputs, run the flow for the
selected notification type, exit. Any failure becomes an ``::error::``
annotation and exit status 1; messages already posted are left in place.

Run with: python -m slack_release_notify.main
"""
from __future__ import annotations

import asyncio
import structlog
from pydantic import ValidationError

from slack_release_notify.ci.outputs import set_failed
from slack_release_notify.config import get_settings, validate_inputs
from slack_release_notify.DI import Container
from slack_release_notify.exceptions import ConfigurationError, NotifyError
from slack_release_notify.logging.config import configure_logging


def describe_validation_error(exc: ValidationError) -> str:
    """One-line summary of a settings validation error, naming each bad input."""
    parts: list[str] = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"]) or exc.title
        message = str(err["msg"]).removeprefix("Value error, ")
        parts.append(f"{location}: {message}")
    return "Invalid configuration: " + "; ".join(parts)


async def run() -> int:
    """Run one notification. Returns the process exit status."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        set_failed(describe_validation_error(exc))
        return 1

    configure_logging(settings)
    logger = structlog.get_logger("main")

    try:
        kind = validate_inputs(settings)
    except ConfigurationError as exc:
        logger.error("main_invalid_configuration", error_message=str(exc))
        set_failed(str(exc))
        return 1

    container = Container()
    http_client = container.http_client()
    try:
        await container.orchestrator().run(kind)
    except NotifyError as exc:
        logger.error(
            "main_notify_failed",
            notify_kind=kind.value,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        set_failed(str(exc))
        return 1
    except Exception as exc:
        logger.exception("main_unexpected_error", notify_kind=kind.value)
        set_failed(f"{type(exc).__name__}: {exc}")
        return 1
    finally:
        await http_client.aclose()

    logger.info("main_notify_complete", notify_kind=kind.value)
    return 0


def main() -> None:
    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
