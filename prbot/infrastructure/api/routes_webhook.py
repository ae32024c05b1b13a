"""GitHub webhook endpoint - verify, parse and dispatch deliveries."""

from __future__ import annotations

import hashlib
import hmac
import json
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from prbot.application.event_router import EventRouter
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.config import settings
from prbot.domain.entities.webhook_event import MalformedPayload, UnsupportedEvent, WebhookEvent
from prbot.infrastructure.api.dependencies import get_event_router, get_github

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])


def verify_signature(secret: str, body: bytes, signature_header: str | None) -> bool:
    if not signature_header or not signature_header.startswith("sha256="):
        return False
    expected = "sha256=" + hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature_header)


@router.post(settings.webhook_path)
async def receive_webhook(
    request: Request,
    x_github_event: str = Header(default=""),
    x_github_delivery: str | None = Header(default=None),
    x_hub_signature_256: str | None = Header(default=None),
    event_router: EventRouter = Depends(get_event_router),
    github: CodeHostPort = Depends(get_github),
):
    """Handle one delivery. Handler failures are reported, not returned as HTTP errors."""
    body = await request.body()

    if settings.webhook_secret and not verify_signature(
        settings.webhook_secret, body, x_hub_signature_256
    ):
        logger.warning("Rejected delivery %s: bad signature", x_github_delivery)
        raise HTTPException(status_code=401, detail="Invalid signature")

    try:
        payload = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Body is not valid JSON") from None
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Body must be a JSON object")

    try:
        event = WebhookEvent.from_payload(x_github_event, payload, delivery_id=x_github_delivery)
    except UnsupportedEvent as exc:
        logger.debug("Ignoring delivery %s: %s", x_github_delivery, exc)
        return JSONResponse(status_code=202, content={"status": "ignored", "event": str(exc)})
    except MalformedPayload as exc:
        logger.warning("Malformed payload in delivery %s: %s", x_github_delivery, exc)
        raise HTTPException(status_code=400, detail=exc.args[0]) from None

    outcomes = await event_router.dispatch(event, github)
    failed = [o for o in outcomes if not o.ok]
    if failed:
        logger.warning(
            "Delivery %s: %d/%d handlers failed", x_github_delivery, len(failed), len(outcomes)
        )

    return {
        "status": "ok",
        "event": event.event_type.value,
        "delivery": x_github_delivery,
        "handlers": [
            {"name": o.handler, "ok": o.ok, "error": o.error}
            for o in outcomes
        ],
    }
