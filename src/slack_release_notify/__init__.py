"""Slack notifications for GitHub releases, staging pushes and deployments."""

from slack_release_notify.clients import AsyncHttpClient, GitHubClient, SlackClient
from slack_release_notify.config import get_settings
from slack_release_notify.DI import Container
from slack_release_notify.formatting import MarkupTranslator, MentionMapper
from slack_release_notify.notifications import NotificationComposer
from slack_release_notify.services import ContributorResolver, LifecycleOrchestrator

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "Container",
    "ContributorResolver",
    "GitHubClient",
    "LifecycleOrchestrator",
    "MarkupTranslator",
    "MentionMapper",
    "NotificationComposer",
    "SlackClient",
    "get_settings",
]
