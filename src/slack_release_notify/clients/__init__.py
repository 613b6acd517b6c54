"""HTTP and API clients."""

from slack_release_notify.clients.github_api import GitHubClient
from slack_release_notify.clients.http import AsyncHttpClient
from slack_release_notify.clients.slack_api import SlackClient

__all__ = [
    "AsyncHttpClient",
    "GitHubClient",
    "SlackClient",
]
