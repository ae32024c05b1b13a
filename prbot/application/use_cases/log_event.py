"""LogEventUseCase - log every pull request event the bot receives."""

from __future__ import annotations

import logging

from prbot.application.event_router import WebhookHandler
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.domain.entities.webhook_event import WebhookEvent
from prbot.domain.value_objects.enums import EventType

logger = logging.getLogger(__name__)

_EVENT_LABELS = {
    EventType.PR_OPENED: "open",
    EventType.PR_EDITED: "edited",
    EventType.PR_SYNCHRONIZE: "sync",
}


class LogEventUseCase(WebhookHandler):
    name = "webhookLogging"
    triggers = (EventType.PR_OPENED, EventType.PR_EDITED, EventType.PR_SYNCHRONIZE)

    async def handle(self, event: WebhookEvent, github: CodeHostPort) -> None:
        logger.info(
            "Pull request %s event for #%d",
            _EVENT_LABELS[event.event_type], event.pull_request.number,
        )
