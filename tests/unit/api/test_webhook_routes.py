"""Tests for the webhook and health endpoints."""

import hashlib
import hmac
import json

import pytest
from fastapi.testclient import TestClient

from prbot.config import Settings, settings
from prbot.infrastructure.api.dependencies import build_router, get_event_router, get_github
from prbot.main import app

GROUPS = {"Cache and eviction": ["alice", "bob"], "Logging": ["bob", "carol"]}


@pytest.fixture
def fake_github(github_factory):
    return github_factory(membership_status=404)


@pytest.fixture
def client(fake_github, notifier, tracker_factory, sme_groups_factory):
    config = Settings(TICKET_PREFIX="WT", DRY_RUN=False)
    router = build_router(
        config,
        notifier,
        tracker=tracker_factory({"WT-4821": ["Cache and eviction", "Logging"]}),
        sme_groups=sme_groups_factory(GROUPS),
    )
    app.dependency_overrides[get_event_router] = lambda: router
    app.dependency_overrides[get_github] = lambda: fake_github
    yield TestClient(app)
    app.dependency_overrides.clear()


def _post(client, payload, event="pull_request", headers=None):
    return client.post(
        settings.webhook_path,
        content=json.dumps(payload),
        headers={
            "Content-Type": "application/json",
            "X-GitHub-Event": event,
            "X-GitHub-Delivery": "delivery-1",
            **(headers or {}),
        },
    )


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_opened_runs_every_rule(client, fake_github, notifier, payload_factory):
    response = _post(client, payload_factory("opened"))

    assert response.status_code == 200
    body = response.json()
    assert body["event"] == "pull_request.opened"
    assert body["delivery"] == "delivery-1"
    assert {h["name"] for h in body["handlers"]} == {
        "webhookLogging", "prTitleValidation", "externalContributorChecks", "assignDevelopers",
    }
    assert all(h["ok"] for h in body["handlers"])

    assert len(fake_github.checks) == 2
    assert fake_github.assignees[42] == ["alice", "bob", "carol"]
    assert len(fake_github.comments[42]) == 2
    assert len(notifier.messages) == 1


def test_edited_runs_title_check_only(client, fake_github, payload_factory):
    payload = payload_factory("edited", title="bad title", changes={"title": {"from": "WT-1 x"}})
    response = _post(client, payload)

    names = {h["name"] for h in response.json()["handlers"]}
    assert names == {"webhookLogging", "prTitleValidation"}
    assert [c.conclusion.value for c in fake_github.checks] == ["failure"]


def test_unsupported_event_is_ignored(client, fake_github, payload_factory):
    response = _post(client, payload_factory("closed"))
    assert response.status_code == 202
    assert response.json()["status"] == "ignored"
    assert fake_github.calls == []


def test_invalid_json_is_rejected(client):
    response = client.post(
        settings.webhook_path, content=b"not json", headers={"X-GitHub-Event": "pull_request"}
    )
    assert response.status_code == 400


def test_handler_failure_does_not_fail_delivery(client, fake_github, notifier, payload_factory):
    async def broken(repo, check):
        raise RuntimeError("check API down")

    fake_github.create_check = broken
    response = _post(client, payload_factory("synchronize"))

    assert response.status_code == 200
    outcomes = {h["name"]: h for h in response.json()["handlers"]}
    assert not outcomes["prTitleValidation"]["ok"]
    assert outcomes["prTitleValidation"]["error"] == "check API down"
    assert outcomes["webhookLogging"]["ok"]
    errors = [m for s, m, _ in notifier.messages if s.value == "error"]
    assert len(errors) == 2


def test_signature_required_when_secret_set(client, payload_factory, monkeypatch):
    monkeypatch.setattr(settings, "webhook_secret", "s3cret")
    body = json.dumps(payload_factory("closed")).encode()
    signature = "sha256=" + hmac.new(b"s3cret", body, hashlib.sha256).hexdigest()

    bad = _post(client, payload_factory("closed"), headers={"X-Hub-Signature-256": "sha256=00"})
    assert bad.status_code == 401

    good = client.post(
        settings.webhook_path,
        content=body,
        headers={"X-GitHub-Event": "pull_request", "X-Hub-Signature-256": signature},
    )
    assert good.status_code == 202


def test_malformed_payload_is_bad_request(client, fake_github, payload_factory):
    payload = payload_factory("opened")
    del payload["pull_request"]["head"]
    response = _post(client, payload)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail.startswith("pull_request.opened: missing")
    assert fake_github.calls == []
