"""Exceptions subpackage."""

from slack_release_notify.exceptions.exceptions import (
    ConfigurationError,
    GitHubAPIError,
    MissingRequiredConfigError,
    NotifyError,
    RateLimitError,
    ReactionAlreadyExistsError,
    SlackAPIError,
    UpstreamAPIError,
)

__all__ = [
    "ConfigurationError",
    "GitHubAPIError",
    "MissingRequiredConfigError",
    "NotifyError",
    "RateLimitError",
    "ReactionAlreadyExistsError",
    "SlackAPIError",
    "UpstreamAPIError",
]
