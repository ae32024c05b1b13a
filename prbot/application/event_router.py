"""EventRouter - fan a webhook event out to every handler subscribed to its type."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from typing import ClassVar

from prbot.application.error_reporting import report_webhook_error
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.application.ports.notifier_port import NotifierPort
from prbot.domain.entities.webhook_event import WebhookEvent
from prbot.domain.value_objects.enums import EventType

logger = logging.getLogger(__name__)


class WebhookHandler(ABC):
    """A rule that reacts to one or more event types."""

    name: ClassVar[str]
    triggers: ClassVar[tuple[EventType, ...]]

    @abstractmethod
    async def handle(self, event: WebhookEvent, github: CodeHostPort) -> None:
        ...


@dataclass
class HandlerOutcome:
    """Result of running one handler for one event."""

    handler: str
    ok: bool
    error: str | None = None


class EventRouter:
    """Routing table from event type to an ordered list of handlers.

    Handlers registered for the same type run concurrently and independently:
    an exception in one is reported to the debug channel and recorded as a
    failed outcome, it never reaches the caller or the other handlers.
    """

    def __init__(self, notifier: NotifierPort):
        self._notifier = notifier
        self._handlers: dict[EventType, list[WebhookHandler]] = defaultdict(list)

    def register(self, handler: WebhookHandler) -> None:
        for event_type in handler.triggers:
            self._handlers[event_type].append(handler)

    def handlers_for(self, event_type: EventType) -> list[WebhookHandler]:
        return list(self._handlers.get(event_type, []))

    async def dispatch(self, event: WebhookEvent, github: CodeHostPort) -> list[HandlerOutcome]:
        handlers = self.handlers_for(event.event_type)
        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type.value)
            return []
        return list(
            await asyncio.gather(*(self._run(h, event, github) for h in handlers))
        )

    async def _run(
        self, handler: WebhookHandler, event: WebhookEvent, github: CodeHostPort
    ) -> HandlerOutcome:
        webhook = f"{handler.name} {event.event_type.value}"
        try:
            await handler.handle(event, github)
        except Exception as exc:
            logger.exception("Handler %s failed for PR #%d", webhook, event.pull_request.number)
            try:
                await report_webhook_error(self._notifier, exc, event.payload, webhook)
            except Exception:
                logger.exception("Could not report failure of %s", webhook)
            return HandlerOutcome(handler=handler.name, ok=False, error=str(exc) or type(exc).__name__)
        return HandlerOutcome(handler=handler.name, ok=True)
