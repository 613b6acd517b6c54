# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from slack_release_notify.ci.context import ActionContext, RunnerEnv
from slack_release_notify.ci.outputs import StepOutputs
from slack_release_notify.clients.github_api import GitHubClient
from slack_release_notify.clients.http import AsyncHttpClient
from slack_release_notify.clients.slack_api import SlackClient
from slack_release_notify.config import Settings, get_settings
from slack_release_notify.formatting.markup import MarkupTranslator
from slack_release_notify.formatting.mentions import MentionMapper
from slack_release_notify.notifications.composer import NotificationComposer
from slack_release_notify.services.contributors import ContributorResolver
from slack_release_notify.services.lifecycle import LifecycleOrchestrator


def _build_mention_mapper(settings: Settings) -> MentionMapper:
    return MentionMapper(settings.inputs.username_mapping)


def _build_translator(settings: Settings, mentions: MentionMapper) -> MarkupTranslator:
    return MarkupTranslator(
        mentions,
        repository=settings.inputs.repository,
        server_url=settings.github.server_url,
    )


def _build_composer(
    settings: Settings,
    translator: MarkupTranslator,
    mentions: MentionMapper,
) -> NotificationComposer:
    return NotificationComposer(translator, mentions, repository=settings.inputs.repository)


def _build_step_outputs(runner: RunnerEnv) -> StepOutputs:
    return StepOutputs(runner.output)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, runner context, API clients and the orchestrator."""

    config = providers.Callable(get_settings)

    runner_env = providers.Singleton(RunnerEnv)

    action_context = providers.Singleton(ActionContext.from_env, runner=runner_env)

    step_outputs = providers.Singleton(_build_step_outputs, runner_env)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    github_client = providers.Singleton(
        GitHubClient,
        http_client=http_client,
        settings=config,
    )

    slack_client = providers.Singleton(
        SlackClient,
        settings=config,
    )

    mention_mapper = providers.Singleton(_build_mention_mapper, config)

    markup_translator = providers.Singleton(_build_translator, config, mention_mapper)

    notification_composer = providers.Singleton(
        _build_composer, config, markup_translator, mention_mapper
    )

    contributor_resolver = providers.Singleton(
        ContributorResolver,
        github=github_client,
    )

    orchestrator = providers.Singleton(
        LifecycleOrchestrator,
        settings=config,
        github=github_client,
        slack=slack_client,
        resolver=contributor_resolver,
        composer=notification_composer,
        context=action_context,
        outputs=step_outputs,
    )
