"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from prbot.application.ports.code_host_port import CodeHostPort
from prbot.application.ports.notifier_port import NotifierPort
from prbot.application.ports.sme_groups_port import SmeGroupsSource
from prbot.application.ports.tracker_port import TrackerPort
from prbot.domain.entities.webhook_event import WebhookEvent

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeGitHub(CodeHostPort):
    def __init__(self, membership_status: int = 404, files: dict[str, str] | None = None):
        self.membership_status = membership_status
        self.files = files or {}
        self.checks = []
        self.comments: dict[int, list[str]] = {}
        self.assignees: dict[int, list[str]] = {}
        self.calls: list[str] = []
        self.membership_queries: list[tuple[str, str]] = []

    @property
    def mutating_calls(self) -> list[str]:
        return [c for c in self.calls if c in {"create_check", "create_comment", "add_assignees"}]

    async def create_check(self, repo, check):
        self.calls.append("create_check")
        self.checks.append(check)

    async def create_comment(self, repo, number, body):
        self.calls.append("create_comment")
        self.comments.setdefault(number, []).append(body)

    async def list_comments(self, repo, number):
        self.calls.append("list_comments")
        return list(self.comments.get(number, []))

    async def add_assignees(self, repo, number, assignees):
        self.calls.append("add_assignees")
        self.assignees.setdefault(number, []).extend(assignees)

    async def check_membership(self, org, username):
        self.calls.append("check_membership")
        self.membership_queries.append((org, username))
        return self.membership_status

    async def get_file_content(self, repo, path):
        self.calls.append("get_file_content")
        return self.files.get(path)


class FakeNotifier(NotifierPort):
    def __init__(self):
        self.messages = []

    async def send(self, message, severity, details=None):
        self.messages.append((severity, message, details))

    def by_severity(self, severity):
        return [m for s, m, _ in self.messages if s == severity]


class FakeTracker(TrackerPort):
    def __init__(self, components: dict[str, list[str]] | None = None):
        self.components = components or {}
        self.queries: list[str] = []

    async def get_components(self, ticket):
        self.queries.append(ticket)
        return self.components.get(ticket)


class FakeSmeGroups(SmeGroupsSource):
    def __init__(self, groups: dict[str, list[str]] | None):
        self.groups = groups
        self.loads = 0

    async def load(self, github, repo):
        self.loads += 1
        return self.groups


def make_payload(
    action: str = "opened",
    title: str = "WT-4821 Fix perf regression",
    number: int = 42,
    author: str = "contributor",
    org: str | None = "wiredtiger",
    base_ref: str = "develop",
    default_branch: str = "develop",
    head_sha: str = "abc123",
    changes: dict | None = None,
) -> dict:
    payload = {
        "action": action,
        "number": number,
        "pull_request": {
            "number": number,
            "title": title,
            "html_url": f"https://github.com/wiredtiger/wiredtiger/pull/{number}",
            "user": {"login": author},
            "head": {"sha": head_sha},
            "base": {"ref": base_ref, "label": f"wiredtiger:{base_ref}"},
        },
        "repository": {
            "name": "wiredtiger",
            "owner": {"login": "wiredtiger"},
            "default_branch": default_branch,
        },
    }
    if org is not None:
        payload["organization"] = {"login": org}
    if changes is not None:
        payload["changes"] = changes
    return payload


def make_event(action: str = "opened", **kwargs) -> WebhookEvent:
    return WebhookEvent.from_payload("pull_request", make_payload(action, **kwargs))


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def github_factory():
    return FakeGitHub


@pytest.fixture
def tracker_factory():
    return FakeTracker


@pytest.fixture
def sme_groups_factory():
    return FakeSmeGroups
