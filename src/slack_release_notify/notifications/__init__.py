"""Notification layouts."""

from slack_release_notify.notifications.composer import (
    NotificationComposer,
    NotificationPayload,
    ReleasePayload,
    StagingPayload,
    deployment_reply,
)

__all__ = [
    "NotificationComposer",
    "NotificationPayload",
    "ReleasePayload",
    "StagingPayload",
    "deployment_reply",
]
