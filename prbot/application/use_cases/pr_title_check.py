"""PrTitleCheckUseCase - report whether the PR title references a ticket."""

from __future__ import annotations

import logging

from prbot.application.event_router import WebhookHandler
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.domain.entities.check_result import CheckResult
from prbot.domain.entities.webhook_event import WebhookEvent
from prbot.domain.policies.branches import targets_default_branch
from prbot.domain.policies.pr_title import (
    TITLE_CHECK_SUMMARY,
    evaluate_title,
    title_check_name,
)
from prbot.domain.value_objects.enums import EventType

logger = logging.getLogger(__name__)


class PrTitleCheckUseCase(WebhookHandler):
    """Runs on creation, on title edits and on every new commit.

    Checks are tied to the head commit, so a new push needs a fresh result
    even though the title didn't change.
    """

    name = "prTitleValidation"
    triggers = (EventType.PR_OPENED, EventType.PR_EDITED, EventType.PR_SYNCHRONIZE)

    def __init__(self, ticket_prefix: str, dry_run: bool = False):
        self._prefix = ticket_prefix
        self._dry_run = dry_run

    async def handle(self, event: WebhookEvent, github: CodeHostPort) -> None:
        pr = event.pull_request
        if not targets_default_branch(pr, self.name):
            return

        if event.event_type == EventType.PR_EDITED and not event.title_changed:
            logger.debug("PR #%d edited without a title change, skipping title check", pr.number)
            return

        check = self.evaluate(event)
        if self._dry_run:
            logger.info("Dry run: Reporting pr_title check result:\n%s", check.describe())
            return

        await github.create_check(pr.repository, check)
        logger.info("PR #%d title check: %s", pr.number, check.conclusion.value)

    def evaluate(self, event: WebhookEvent) -> CheckResult:
        pr = event.pull_request
        return CheckResult(
            name=title_check_name(self._prefix),
            conclusion=evaluate_title(pr.title, self._prefix),
            summary=TITLE_CHECK_SUMMARY,
            head_sha=pr.head_sha,
        )
