"""WebhookEvent - one supported pull_request delivery, parsed from its JSON payload."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from prbot.domain.entities.pull_request import PullRequestSnapshot, RepositoryRef
from prbot.domain.value_objects.enums import EventType


class UnsupportedEvent(ValueError):
    """The delivery is not one of the pull_request actions the bot handles."""


class MalformedPayload(KeyError):
    """A mandatory field is missing from a supported event's payload."""


@dataclass(frozen=True)
class WebhookEvent:
    event_type: EventType
    pull_request: PullRequestSnapshot
    organization: str | None
    changes: dict[str, Any] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    delivery_id: str | None = None

    @property
    def title_changed(self) -> bool:
        return "title" in self.changes

    @classmethod
    def from_payload(
        cls,
        event_name: str,
        payload: dict[str, Any],
        delivery_id: str | None = None,
    ) -> WebhookEvent:
        """Build an event from the ``X-GitHub-Event`` name and the JSON body.

        Raises:
            UnsupportedEvent: for any event/action pair outside ``EventType``.
            MalformedPayload: if the pull request or repository block is incomplete.
        """
        tag = f"{event_name}.{payload.get('action', '')}"
        try:
            event_type = EventType(tag)
        except ValueError:
            raise UnsupportedEvent(tag) from None

        try:
            pr = payload["pull_request"]
            repo = payload["repository"]
            repository = RepositoryRef(
                owner=repo["owner"]["login"],
                name=repo["name"],
                default_branch=repo["default_branch"],
            )
            snapshot = PullRequestSnapshot(
                number=pr["number"],
                title=pr["title"],
                head_sha=pr["head"]["sha"],
                base_ref=_base_branch(pr["base"]),
                author=pr["user"]["login"],
                url=pr.get("html_url") or pr.get("url", ""),
                repository=repository,
            )
        except (KeyError, TypeError, IndexError) as exc:
            raise MalformedPayload(f"{tag}: missing {exc}") from exc

        organization = (payload.get("organization") or {}).get("login") or None

        return cls(
            event_type=event_type,
            pull_request=snapshot,
            organization=organization,
            changes=payload.get("changes") or {},
            payload=payload,
            delivery_id=delivery_id,
        )


def _base_branch(base: dict[str, Any]) -> str:
    # "label" is "<owner>:<branch>"; "ref" is the bare branch name
    if base.get("ref"):
        return base["ref"]
    return base["label"].split(":", 1)[1]
