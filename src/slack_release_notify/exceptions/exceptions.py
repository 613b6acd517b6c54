"""Custom exceptions for configuration, GitHub and Slack failures."""

from __future__ import annotations


class NotifyError(Exception):
    """Base exception for notification errors."""

    pass


class ConfigurationError(NotifyError):
    """Raised when an input is invalid or the notification type is unknown."""

    pass


class MissingRequiredConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    pass


class UpstreamAPIError(NotifyError):
    """Raised when a GitHub or Slack API request fails."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(UpstreamAPIError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class GitHubAPIError(UpstreamAPIError):
    """Raised when a GitHub REST call fails or returns an unexpected document."""

    pass


class SlackAPIError(UpstreamAPIError):
    """Raised when a Slack Web API method answers with ``ok: false``."""

    def __init__(
        self,
        message: str,
        *,
        error: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=status_code)
        self.error = error


class ReactionAlreadyExistsError(SlackAPIError):
    """Raised by reactions.add when the reaction is already on the message."""

    pass
