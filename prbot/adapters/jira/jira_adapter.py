"""Jira adapter - implements TrackerPort with unauthenticated REST reads."""

from __future__ import annotations

import logging

import httpx

from prbot.application.ports.tracker_port import TrackerPort
from prbot.config import settings

logger = logging.getLogger(__name__)


class JiraAdapter(TrackerPort):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.jira_base_url).rstrip("/")
        self._timeout = timeout or settings.http_timeout
        self._transport = transport

    def issue_url(self, ticket: str) -> str:
        return f"{self._base_url}/rest/api/2/issue/{ticket}"

    async def get_components(self, ticket: str) -> list[str] | None:
        """Return the names in the ticket's ``components`` field.

        Private or missing tickets come back without a ``fields`` block; those
        and any non-JSON answer are reported as unresolved (None).
        """
        url = self.issue_url(ticket)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, params={"fields": "components"})
            data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Jira request failed for %s", ticket)
            return None

        fields = data.get("fields") if isinstance(data, dict) else None
        if not isinstance(fields, dict) or not isinstance(fields.get("components"), list):
            logger.warning("No component list for %s (HTTP %d, GET %s)", ticket, response.status_code, url)
            return None

        if not all(isinstance(c, dict) for c in fields["components"]):
            logger.warning("Malformed component list for %s: %r", ticket, fields["components"])
            return None

        components = [c["name"] for c in fields["components"] if c.get("name")]
        logger.info("Ticket %s components: %s", ticket, components)
        return components
