# -*- coding: utf-8 -*-
"""Slack Web API client (chat.postMessage, reactions.add/remove) on slack_sdk."""

from __future__ import annotations

import asyncio
import aiohttp
import structlog
from typing import Any, Awaitable, Callable, Optional

from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from slack_release_notify.config import Settings
from slack_release_notify.exceptions import ReactionAlreadyExistsError, SlackAPIError
from slack_release_notify.models.blocks import SlackBlock, ThreadRef

ALREADY_REACTED = "already_reacted"


class SlackClient:
    """Slack client authenticated with the bot token.

    slack_sdk raises SlackApiError for ``{"ok": false}`` answers; those are
    re-raised as SlackAPIError carrying the error code, with ``already_reacted``
    as ReactionAlreadyExistsError.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        web_client: Optional[AsyncWebClient] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Application settings (uses settings.slack.bot_token,
                settings.api.slack_api_url and settings.api.timeout_seconds).
            web_client: Optional preconfigured AsyncWebClient.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._client = web_client or AsyncWebClient(
            token=settings.slack.bot_token,
            base_url=settings.api.slack_api_url.rstrip("/") + "/",
            timeout=int(settings.api.timeout_seconds),
        )
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _call(self, method: str, call: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await call()
        except SlackApiError as e:
            error = str(e.response.get("error") or "unknown_error")
            exc_type = ReactionAlreadyExistsError if error == ALREADY_REACTED else SlackAPIError
            raise exc_type(
                f"Slack {method} failed: {error}",
                error=error,
                status_code=e.response.status_code,
            ) from e
        except (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(
                "slack_request_failed",
                slack_method=method,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise SlackAPIError(f"Slack {method} request failed: {e}") from e

    async def post_message(
        self,
        channel: str,
        text: str,
        *,
        blocks: Optional[list[SlackBlock]] = None,
        thread_ts: Optional[str] = None,
        reply_broadcast: bool = False,
    ) -> ThreadRef:
        """Post a message and return where it landed.

        Raises:
            SlackAPIError: If Slack rejects the message or omits channel/ts.
        """
        response = await self._call(
            "chat.postMessage",
            lambda: self._client.chat_postMessage(
                channel=channel,
                text=text,
                blocks=blocks,
                thread_ts=thread_ts or None,
                reply_broadcast=True if reply_broadcast else None,
            ),
        )
        posted_channel = response.get("channel")
        ts = response.get("ts")
        if not posted_channel or not ts:
            raise SlackAPIError("Slack chat.postMessage response is missing channel or ts")
        self._logger.info(
            "slack_message_posted",
            slack_channel=posted_channel,
            slack_ts=ts,
            slack_thread_ts=thread_ts,
        )
        return ThreadRef(channel=str(posted_channel), ts=str(ts))

    async def add_reaction(self, ref: ThreadRef, name: str) -> None:
        """Add an emoji reaction.

        Raises:
            ReactionAlreadyExistsError: The reaction is already on the message.
            SlackAPIError: Any other failure.
        """
        await self._call(
            "reactions.add",
            lambda: self._client.reactions_add(channel=ref.channel, timestamp=ref.ts, name=name),
        )
        self._logger.debug("slack_reaction_added", slack_channel=ref.channel, slack_reaction=name)

    async def remove_reaction(self, ref: ThreadRef, name: str) -> None:
        await self._call(
            "reactions.remove",
            lambda: self._client.reactions_remove(channel=ref.channel, timestamp=ref.ts, name=name),
        )
        self._logger.debug("slack_reaction_removed", slack_channel=ref.channel, slack_reaction=name)
