"""ExternalContributorCheckUseCase - handling for PRs from outside the organization.

- On PR creation post a welcome message asking for the contributor agreement.
- Add a neutral check reminding reviewers to verify the agreement was signed.
- Tell the team channel an external PR arrived so it gets a timely response.
"""

from __future__ import annotations

import json
import logging

from prbot.application.event_router import WebhookHandler
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.application.ports.notifier_port import NotifierPort
from prbot.domain.entities.check_result import CheckResult
from prbot.domain.entities.pull_request import PullRequestSnapshot
from prbot.domain.entities.webhook_event import WebhookEvent
from prbot.domain.policies.membership import classify_membership, is_member
from prbot.domain.value_objects.enums import CheckConclusion, EventType, MembershipStatus

logger = logging.getLogger(__name__)

CONTRIBUTOR_CHECK_NAME = "External user. Please check contributors agreement"
CONTRIBUTOR_AGREEMENT_URL = "https://www.mongodb.com/legal/contributor-agreement"
CONTRIBUTORS_LIST_URL = "https://contributors.corp.mongodb.com/"
BRANCH_PERMISSIONS_URL = (
    "https://docs.github.com/en/pull-requests/collaborating-with-pull-requests/"
    "working-with-forks/allowing-changes-to-a-pull-request-branch-created-from-a-fork"
)
WELCOME_MARKER = "<!-- prbot:external-contributor-welcome -->"


def welcome_message(author: str) -> str:
    return (
        f"Hi @{author}, thank you for your submission!\n"
        f"Please make sure to sign our [Contributor Agreement]({CONTRIBUTOR_AGREEMENT_URL}) "
        "and provide us with editor permissions on your branch.\n"
        f"Instructions on how do that can be found [here]({BRANCH_PERMISSIONS_URL}).\n"
        f"{WELCOME_MARKER}"
    )


def contributor_check(head_sha: str) -> CheckResult:
    # Neutral until the agreement list can be parsed into a pass/fail answer
    return CheckResult(
        name=CONTRIBUTOR_CHECK_NAME,
        conclusion=CheckConclusion.NEUTRAL,
        summary=(
            "Make sure that an external contributor has signed the contributors agreement.\n"
            "This check only appears for external contributors.\n"
            f"The contributors list can be [found here]({CONTRIBUTORS_LIST_URL})"
        ),
        head_sha=head_sha,
    )


def new_pr_notification(pr: PullRequestSnapshot) -> str:
    return (
        f"External PR opened by `{pr.author}`!\n"
        f"<{pr.url}|*#{pr.number} {pr.title}*>\n"
        "Please assign a reviewer or triage for a future sprint.\n"
        "If the PR will be reviewed at a later date please inform the submitter of this decision."
    )


class ExternalContributorCheckUseCase(WebhookHandler):
    name = "externalContributorChecks"
    triggers = (EventType.PR_OPENED, EventType.PR_SYNCHRONIZE)

    def __init__(self, notifier: NotifierPort, dry_run: bool = False):
        self._notifier = notifier
        self._dry_run = dry_run

    async def handle(self, event: WebhookEvent, github: CodeHostPort) -> None:
        pr = event.pull_request
        org = event.organization
        if not org:
            await self._notifier.warn(
                "Warning! Couldn't extract organization from payload",
                json.dumps(event.payload, indent=2, default=str),
            )
            return

        if await self.user_is_org_member(github, pr.author, org):
            return

        if event.event_type == EventType.PR_OPENED:
            await self._post_welcome_message(github, pr)
            await self._create_agreement_reminder(github, pr)
            await self._notifier.notify(new_pr_notification(pr))
        else:
            # Checks are tied to the latest commit, rerun on every push
            await self._create_agreement_reminder(github, pr)

    async def user_is_org_member(self, github: CodeHostPort, user: str, org: str) -> bool:
        status_code = await github.check_membership(org, user)
        status = classify_membership(status_code)
        if status == MembershipStatus.UNKNOWN:
            await self._notifier.warn(
                f"Unexpected return status '{status_code}' from checkMembershipForUser()!\n"
                f"Value should be 204 or 404. user = '{user}', org = '{org}'"
            )
        return is_member(status)

    async def _post_welcome_message(self, github: CodeHostPort, pr: PullRequestSnapshot) -> None:
        body = welcome_message(pr.author)
        if self._dry_run:
            logger.info("Dry run: posting comment\n%s", body)
            return

        existing = await github.list_comments(pr.repository, pr.number)
        if any(WELCOME_MARKER in comment for comment in existing):
            logger.info("PR #%d already has a welcome message, not posting again", pr.number)
            return
        await github.create_comment(pr.repository, pr.number, body)

    async def _create_agreement_reminder(self, github: CodeHostPort, pr: PullRequestSnapshot) -> None:
        logger.info("Creating new contributors agreement check for PR #%d", pr.number)
        check = contributor_check(pr.head_sha)
        if self._dry_run:
            logger.info("Dry run: Adding 'please check contributors agreement' reminder:\n%s", check.describe())
            return
        await github.create_check(pr.repository, check)
