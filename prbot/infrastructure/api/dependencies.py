"""FastAPI dependency injection - wires adapters into the event router."""

from __future__ import annotations

import logging
from functools import lru_cache

from prbot.adapters.github.github_adapter import GitHubAdapter
from prbot.adapters.jira.jira_adapter import JiraAdapter
from prbot.adapters.slack.slack_notifier import SlackNotifier
from prbot.adapters.sme_groups.file_source import FileSmeGroupsSource
from prbot.adapters.sme_groups.repository_source import RepositorySmeGroupsSource
from prbot.application.event_router import EventRouter
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.application.ports.notifier_port import NotifierPort
from prbot.application.ports.sme_groups_port import SmeGroupsSource
from prbot.application.ports.tracker_port import TrackerPort
from prbot.application.use_cases.assign_developers import AssignDevelopersUseCase
from prbot.application.use_cases.external_contributor_check import ExternalContributorCheckUseCase
from prbot.application.use_cases.log_event import LogEventUseCase
from prbot.application.use_cases.pr_title_check import PrTitleCheckUseCase
from prbot.config import Settings, settings

logger = logging.getLogger(__name__)


def build_sme_groups_source(config: Settings) -> SmeGroupsSource:
    if config.sme_groups_repo_path:
        logger.info("Reading SME groups from repository path %s", config.sme_groups_repo_path)
        return RepositorySmeGroupsSource(config.sme_groups_repo_path)
    return FileSmeGroupsSource(config.sme_groups_file)


def build_router(
    config: Settings,
    notifier: NotifierPort,
    tracker: TrackerPort | None = None,
    sme_groups: SmeGroupsSource | None = None,
) -> EventRouter:
    """Register every rule on a fresh router. The dry-run flag comes from ``config`` only."""
    router = EventRouter(notifier)
    router.register(LogEventUseCase())
    router.register(PrTitleCheckUseCase(ticket_prefix=config.ticket_prefix, dry_run=config.dry_run))
    router.register(ExternalContributorCheckUseCase(notifier=notifier, dry_run=config.dry_run))
    router.register(
        AssignDevelopersUseCase(
            tracker=tracker or JiraAdapter(base_url=config.jira_base_url, timeout=config.http_timeout),
            sme_groups=sme_groups or build_sme_groups_source(config),
            notifier=notifier,
            ticket_prefix=config.ticket_prefix,
            dry_run=config.dry_run,
        )
    )
    return router


@lru_cache
def get_notifier() -> NotifierPort:
    return SlackNotifier(
        notify_webhook=settings.slack_webhook_notify,
        debug_webhook=settings.slack_webhook_debug,
        traces_dir=settings.traces_dir,
        dry_run=settings.dry_run,
    )


@lru_cache
def get_github() -> CodeHostPort:
    return GitHubAdapter(
        token=settings.github_token,
        api_url=settings.resolved_github_api_url,
        timeout=settings.http_timeout,
    )


@lru_cache
def get_event_router() -> EventRouter:
    return build_router(settings, get_notifier())
