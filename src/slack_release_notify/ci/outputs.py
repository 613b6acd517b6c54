# -*- coding: utf-8 -*-
"""Step outputs and failure annotations (GitHub Actions workflow commands)."""

from __future__ import annotations

import sys
import uuid
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

import structlog


class StepOutputs:
    """Write step outputs to the file named by GITHUB_OUTPUT."""

    def __init__(
        self,
        output_path: Optional[str],
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._path = Path(output_path) if output_path else None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def set(self, name: str, value: str) -> None:
        """Append ``name=value`` (heredoc form for multi-line values)."""
        if self._path is None:
            self._logger.warning("step_output_unavailable", output_name=name, output_value=value)
            return
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            entry = f"{name}={value}\n"
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(entry)
        self._logger.debug("step_output_set", output_name=name)


def set_failed(message: str, *, stream: TextIO | None = None) -> None:
    """Emit an ``::error::`` annotation; the caller sets the exit status."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::error::{escaped}", file=stream or sys.stdout, flush=True)
