"""Configuration subpackage."""

from slack_release_notify.config.config import (
    ApiSettings,
    AppSettings,
    GitHubSettings,
    InputsSettings,
    LoggingSettings,
    Settings,
    SlackSettings,
    get_settings,
)
from slack_release_notify.config.validation import validate_inputs

__all__ = [
    "ApiSettings",
    "AppSettings",
    "GitHubSettings",
    "InputsSettings",
    "LoggingSettings",
    "Settings",
    "SlackSettings",
    "get_settings",
    "validate_inputs",
]
