# -*- coding: utf-8 -*-
"""Unit tests for the entry point's failure reporting."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from slack_release_notify import main
from slack_release_notify.config.config import InputsSettings, Settings


async def test_invalid_settings_fail_the_step(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(main, "get_settings", lambda: InputsSettings(username_mapping_raw="{bad"))

    assert await main.run() == 1

    out = capsys.readouterr().out
    assert out.startswith("::error::Invalid configuration: ")
    assert "'username-mapping' is not valid JSON" in out


async def test_invalid_inputs_fail_before_any_request(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    settings_factory: Callable[..., Settings],
) -> None:
    monkeypatch.setattr(main, "get_settings", lambda: settings_factory(notify_type="rollback"))
    monkeypatch.setattr(main, "configure_logging", lambda settings: None)
    monkeypatch.setattr(main, "Container", None)

    assert await main.run() == 1

    assert "::error::Invalid notification type 'rollback'" in capsys.readouterr().out
