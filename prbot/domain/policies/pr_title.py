"""PR title policy - ticket prefix, revert exemption and ASCII-only rule.

Automation tools read PR titles (and the squash commit messages derived from
them) to update tracker tickets, so every title has to start with a ticket key
followed by a space. Revert PRs only need to satisfy the ASCII requirement.
"""

from __future__ import annotations

import re

from prbot.domain.value_objects.enums import CheckConclusion

REVERT_PREFIX = "Revert"

TITLE_CHECK_SUMMARY = (
    "Automation tools use PR titles and the commit message of the resulting merge "
    "commit (which is derived from the PR title) to update Jira tickets.\n"
    "For this to work the commit and PR title must begin with the ticket number "
    "followed by a space, and must use only ASCII characters.\n"
    "An exception to this rule is revert PRs, which only need to meet the ASCII requirement."
)


def title_pattern_string(prefix: str) -> str:
    """Human readable pattern shown in the check name, e.g. ``WT-[0-9]+ .*``."""
    return f"{prefix}-[0-9]+ .*"


def title_check_name(prefix: str) -> str:
    return (
        "PR title is an ASCII string. "
        f"Non-revert PRs begin with a {prefix} ticket: '{title_pattern_string(prefix)}'"
    )


def _ticket_regex(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^(?P<ticket>{re.escape(prefix)}-[0-9]+) ")


def is_ascii(text: str) -> bool:
    """True when every character has an ordinal value between 0 and 127."""
    return all(0 <= ord(ch) <= 127 for ch in text)


def extract_ticket(title: str, prefix: str) -> str | None:
    """Return the leading ticket key (``WT-1234``) or None if the title has none."""
    match = _ticket_regex(prefix).match(title)
    if match is None:
        return None
    return match.group("ticket")


def evaluate_title(title: str, prefix: str) -> CheckConclusion:
    has_ticket = title.startswith(REVERT_PREFIX) or extract_ticket(title, prefix) is not None
    if has_ticket and is_ascii(title):
        return CheckConclusion.SUCCESS
    return CheckConclusion.FAILURE
