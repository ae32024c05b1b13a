"""SME assignment policy - map ticket components to developer groups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from prbot.domain.entities.assignment import AssignmentDecision, SmeGroup

# GitHub accepts at most this many assignees on an issue or PR
MAX_ASSIGNEES = 10

ASSIGNMENT_HEADER = "Assigning the following users based on Jira ticket components:\n"
TRUNCATION_NOTICE = (
    "<sub>Github limits PRs to at most 10. Assignee list has been truncated</sub>"
)


def match_sme_groups(
    components: Iterable[str], sme_groups: Mapping[str, Sequence[str]]
) -> list[SmeGroup]:
    """One group per ticket component. Unknown components get an empty member list."""
    return [
        SmeGroup(component=component, members=tuple(sme_groups.get(component) or ()))
        for component in components
    ]


def build_assignee_list(groups: Iterable[SmeGroup]) -> list[str]:
    """Union of all members, duplicates removed, first-seen order kept."""
    seen: dict[str, None] = {}
    for group in groups:
        for member in group.members:
            seen.setdefault(member, None)
    return list(seen)


def build_assignee_message(groups: Iterable[SmeGroup], assignees: Sequence[str]) -> str:
    message = ASSIGNMENT_HEADER
    for group in groups:
        if not group.members:
            continue
        message += f"- `{group.component}`: {', '.join(group.members)}\n"

    if len(assignees) > MAX_ASSIGNEES:
        message += TRUNCATION_NOTICE
    return message


def decide_assignment(
    components: Iterable[str], sme_groups: Mapping[str, Sequence[str]]
) -> AssignmentDecision:
    groups = match_sme_groups(components, sme_groups)
    assignees = build_assignee_list(groups)
    if not assignees:
        return AssignmentDecision(groups=groups)
    return AssignmentDecision(
        assignees=assignees,
        explanation=build_assignee_message(groups, assignees),
        groups=groups,
    )
