"""Summaries of unexpected handler failures for the debug channel."""

from __future__ import annotations

import json
import logging
import traceback
from typing import Any

from prbot.application.ports.notifier_port import NotifierPort

logger = logging.getLogger(__name__)


def build_error_context(error: BaseException, payload: dict[str, Any]) -> str:
    stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return (
        "Stack trace: \n=================\n" + stack
        + "\n\nError:   \n=================\n" + repr(error)
        + "\n\nPayload: \n=================\n"
        + json.dumps(payload, indent=2, default=str)
    )


async def report_webhook_error(
    notifier: NotifierPort,
    error: BaseException,
    payload: dict[str, Any],
    webhook: str,
) -> None:
    """Post the stack trace, error and payload of a failed handler to the debug channel."""
    message = f"Unexpected error when handling `{webhook}` event!"
    await notifier.error(message, build_error_context(error, payload))
