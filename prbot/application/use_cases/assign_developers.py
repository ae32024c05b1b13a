"""AssignDevelopersUseCase - assign SME group members based on ticket components.

Subject-matter-expert groups focus on areas of the codebase. Whenever a PR for
one of those areas is opened its members are added as assignees. This is for
awareness only, it doesn't make them required reviewers.
"""

from __future__ import annotations

import logging

from prbot.application.event_router import WebhookHandler
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.application.ports.notifier_port import NotifierPort
from prbot.application.ports.sme_groups_port import SmeGroupsSource
from prbot.application.ports.tracker_port import TrackerPort
from prbot.domain.entities.assignment import AssignmentDecision
from prbot.domain.entities.pull_request import PullRequestSnapshot
from prbot.domain.entities.webhook_event import WebhookEvent
from prbot.domain.policies.branches import targets_default_branch
from prbot.domain.policies.pr_title import extract_ticket
from prbot.domain.policies.sme_assignment import decide_assignment
from prbot.domain.value_objects.enums import EventType

logger = logging.getLogger(__name__)


class AssignDevelopersUseCase(WebhookHandler):
    # The ticket's component list should already be set by the time the PR is opened
    name = "assignDevelopers"
    triggers = (EventType.PR_OPENED,)

    def __init__(
        self,
        tracker: TrackerPort,
        sme_groups: SmeGroupsSource,
        notifier: NotifierPort,
        ticket_prefix: str,
        dry_run: bool = False,
    ):
        self._tracker = tracker
        self._sme_groups = sme_groups
        self._notifier = notifier
        self._prefix = ticket_prefix
        self._dry_run = dry_run

    async def handle(self, event: WebhookEvent, github: CodeHostPort) -> None:
        pr = event.pull_request
        if not targets_default_branch(pr, self.name):
            return

        decision = await self.build_decision(pr, github)
        if decision is None or decision.is_empty():
            return

        await self.assign(github, pr, decision)

    async def build_decision(
        self, pr: PullRequestSnapshot, github: CodeHostPort
    ) -> AssignmentDecision | None:
        """Work out who to assign and why. None when there's nothing to act on."""
        ticket = extract_ticket(pr.title, self._prefix)
        if ticket is None:
            logger.info("No %s ticket in title of PR #%d, skipping auto-assignment", self._prefix, pr.number)
            return None

        components = await self._tracker.get_components(ticket)
        if components is None:
            await self._notifier.warn(
                f"Couldn't find component list for ticket {ticket}",
                f"PR #{pr.number} in {pr.repository.full_name}",
            )
            return None

        sme_groups = await self._sme_groups.load(github, pr.repository)
        if sme_groups is None:
            await self._notifier.warn(
                "Couldn't load the SME groups configuration",
                f"Skipped auto-assignment for PR #{pr.number} ({ticket})",
            )
            return None

        decision = decide_assignment(components, sme_groups)
        if decision.is_empty():
            logger.info("No developers found to assign for %s (components: %s)", ticket, components)
        return decision

    async def assign(
        self, github: CodeHostPort, pr: PullRequestSnapshot, decision: AssignmentDecision
    ) -> None:
        logger.info("Assigning members to PR #%d", pr.number)
        if self._dry_run:
            logger.info("Dry run: assignee list: [%s]", ", ".join(decision.assignees))
            logger.info('Dry run: PR message: \n"""\n%s\n"""', decision.explanation)
            return

        # Non org members are skipped by the host without an error
        await github.add_assignees(pr.repository, pr.number, decision.assignees)
        await github.create_comment(pr.repository, pr.number, decision.explanation)
