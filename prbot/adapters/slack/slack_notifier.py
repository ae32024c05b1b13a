"""Slack notifier - implements NotifierPort with incoming webhooks.

Notifications go to the NOTIFY webhook and are meant for the whole team.
Warnings and errors go to the DEBUG webhook; they are about the bot's own
operation, for example when processing an event fails.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx

from prbot.application.ports.notifier_port import NotifierPort
from prbot.config import settings
from prbot.domain.value_objects.enums import Severity

logger = logging.getLogger(__name__)

# Slack allows up to 3000 characters in a block
MAX_DETAILS_LENGTH = 2950
TRUNCATED_DETAILS_LENGTH = 2800


def wrap_message_in_blocks(message: str, color: str, details: str | None = None) -> dict[str, Any]:
    """Attachment formatting: a coloured bar on the left, details in a second block."""
    blocks = [{"type": "section", "text": {"type": "mrkdwn", "text": message}}]
    if details:
        blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": f"```{details}```"}})
    return {"attachments": [{"color": color, "blocks": blocks}]}


def next_trace_path(traces_dir: Path, now: datetime | None = None) -> Path:
    """Timestamped file name, with a -2, -3, ... suffix if it's already taken."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    candidate = traces_dir / f"{stamp}.txt"
    suffix = 2
    while candidate.exists():
        candidate = traces_dir / f"{stamp}-{suffix}.txt"
        suffix += 1
    return candidate


class SlackNotifier(NotifierPort):
    def __init__(
        self,
        notify_webhook: str | None = None,
        debug_webhook: str | None = None,
        traces_dir: str | Path | None = None,
        dry_run: bool | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._notify_webhook = notify_webhook if notify_webhook is not None else settings.slack_webhook_notify
        self._debug_webhook = debug_webhook if debug_webhook is not None else settings.slack_webhook_debug
        self._traces_dir = Path(traces_dir if traces_dir is not None else settings.traces_dir)
        self._dry_run = settings.dry_run if dry_run is None else dry_run
        self._timeout = timeout or settings.http_timeout
        self._transport = transport

    def webhook_for(self, severity: Severity) -> str:
        return self._debug_webhook if severity.is_debug() else self._notify_webhook

    async def build_body(self, message: str, severity: Severity, details: str | None = None) -> dict[str, Any]:
        if details and len(details) > MAX_DETAILS_LENGTH:
            details = await self._save_trace(details)
        return wrap_message_in_blocks(message, severity.color, details)

    async def send(self, message: str, severity: Severity, details: str | None = None) -> None:
        body = await self.build_body(message, severity, details)

        if self._dry_run:
            logger.info("Dry run: Sending slack message:\n%s\n", json.dumps(body))
            return

        webhook = self.webhook_for(severity)
        if not webhook:
            logger.warning("No Slack webhook configured for %s messages: %s", severity.value, message)
            return

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(webhook, json=body)
                response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Failed to send %s message to Slack", severity.value)

    async def _save_trace(self, details: str) -> str:
        # TODO: old trace files are never cleaned up, add a retention limit
        truncated = details[:TRUNCATED_DETAILS_LENGTH]
        try:
            await asyncio.to_thread(self._traces_dir.mkdir, parents=True, exist_ok=True)
            path = await asyncio.to_thread(next_trace_path, self._traces_dir)
            await asyncio.to_thread(path.write_text, details, "utf-8")
        except OSError:
            logger.exception("Could not save trace to %s", self._traces_dir)
            return "Message exceeds 3000 characters. Truncating, full trace not saved\n\n" + truncated

        logger.info("Saved full trace to %s", path)
        return (
            "Message exceeds 3000 characters. "
            f"Truncating and saving full trace to {path}\n\n"
            + truncated
        )
