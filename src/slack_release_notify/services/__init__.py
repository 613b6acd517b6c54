"""Services subpackage."""

from slack_release_notify.services.contributors import (
    PUSH_FALLBACK_COMMITS,
    RECENT_COMMITS_LIMIT,
    ContributorResolver,
    push_contributors,
    resolve_contributors,
)
from slack_release_notify.services.lifecycle import LifecycleOrchestrator

__all__ = [
    "PUSH_FALLBACK_COMMITS",
    "RECENT_COMMITS_LIMIT",
    "ContributorResolver",
    "LifecycleOrchestrator",
    "push_contributors",
    "resolve_contributors",
]
