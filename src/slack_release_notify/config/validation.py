# -*- coding: utf-8 -*-
"""Input validation run before any network call."""

from __future__ import annotations

from slack_release_notify.config.config import Settings
from slack_release_notify.exceptions import ConfigurationError, MissingRequiredConfigError
from slack_release_notify.models.kinds import NotificationKind


def validate_inputs(settings: Settings) -> NotificationKind:
    """Check the inputs required by the selected notification type.

    Returns:
        The parsed notification kind.

    Raises:
        MissingRequiredConfigError: A required input is empty.
        ConfigurationError: The type is unknown or an input is malformed.
    """
    inputs = settings.inputs
    if not settings.slack.bot_token:
        raise MissingRequiredConfigError("'slack-bot-token' is required")

    try:
        kind = NotificationKind(inputs.notify_type)
    except ValueError:
        valid = ", ".join(k.value for k in NotificationKind)
        raise ConfigurationError(
            f"Invalid notification type '{inputs.notify_type}'. Must be one of: {valid}"
        ) from None

    if kind is NotificationKind.RELEASE and not settings.github.token:
        raise MissingRequiredConfigError("'github-token' required for release notifications")
    if kind.is_deployment:
        if not inputs.environment:
            raise MissingRequiredConfigError(
                "'environment' is required for deployment notifications"
            )
        if not inputs.thread_ts:
            raise MissingRequiredConfigError(
                "'thread-ts' is required for deployment notifications"
            )
        if not inputs.reaction_channel:
            raise MissingRequiredConfigError(
                "'channel-id' or 'channel' is required for deployment notifications"
            )

    if not inputs.repository:
        raise MissingRequiredConfigError("'repository' is required")
    owner, _, repo = inputs.repository.partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigurationError("'repository' must be in 'owner/repo' form")

    if not inputs.actor:
        raise MissingRequiredConfigError("'actor' is required")
    if not settings.github.token:
        raise MissingRequiredConfigError("'github-token' is required")
    return kind
