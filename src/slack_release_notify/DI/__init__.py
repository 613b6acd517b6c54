"""Dependency injection."""

from slack_release_notify.DI.container import Container

__all__ = ["Container"]
