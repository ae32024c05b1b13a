"""Branch policy - backports don't follow the default-branch PR rules."""

from __future__ import annotations

import logging

from prbot.domain.entities.pull_request import PullRequestSnapshot

logger = logging.getLogger(__name__)


def targets_default_branch(pr: PullRequestSnapshot, rule: str) -> bool:
    default_branch = pr.repository.default_branch
    if not pr.targets_branch(default_branch):
        logger.info(
            "%s: PR #%d target branch '%s' is not default branch '%s'",
            rule, pr.number, pr.base_ref, default_branch,
        )
        return False
    return True
