"""Notification kinds selected by the ``type`` input."""

from __future__ import annotations

from enum import Enum


class NotificationKind(str, Enum):
    """Notification kinds."""

    RELEASE = "release"
    STAGING = "staging"
    DEPLOYMENT_SUCCESS = "deployment-success"
    DEPLOYMENT_FAILURE = "deployment-failure"

    @property
    def is_deployment(self) -> bool:
        return self in (NotificationKind.DEPLOYMENT_SUCCESS, NotificationKind.DEPLOYMENT_FAILURE)
