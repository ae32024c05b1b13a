"""GitHub REST adapter - implements CodeHostPort."""

from __future__ import annotations

import base64
import logging

import httpx

from prbot.application.ports.code_host_port import CodeHostPort
from prbot.config import settings
from prbot.domain.entities.check_result import CheckResult
from prbot.domain.entities.pull_request import RepositoryRef

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class GitHubAdapter(CodeHostPort):
    """Token-authenticated GitHub client.

    A new ``httpx.AsyncClient`` is opened per call; ``transport`` lets tests
    swap in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        token: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._token = token if token is not None else settings.github_token
        self._api_url = (api_url or settings.resolved_github_api_url).rstrip("/")
        self._timeout = timeout or settings.http_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return httpx.AsyncClient(
            base_url=self._api_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def create_check(self, repo: RepositoryRef, check: CheckResult) -> None:
        async with self._client() as client:
            response = await client.post(
                f"/repos/{repo.owner}/{repo.name}/check-runs",
                json={
                    "name": check.name,
                    "head_sha": check.head_sha,
                    "status": "completed",
                    "conclusion": check.conclusion.value,
                    "output": {"title": check.title, "summary": check.summary},
                },
            )
            response.raise_for_status()
        logger.debug("Created check '%s' on %s@%s", check.name, repo.full_name, check.head_sha)

    async def create_comment(self, repo: RepositoryRef, number: int, body: str) -> None:
        async with self._client() as client:
            response = await client.post(
                f"/repos/{repo.owner}/{repo.name}/issues/{number}/comments",
                json={"body": body},
            )
            response.raise_for_status()

    async def list_comments(self, repo: RepositoryRef, number: int) -> list[str]:
        bodies: list[str] = []
        async with self._client() as client:
            page = 1
            while True:
                response = await client.get(
                    f"/repos/{repo.owner}/{repo.name}/issues/{number}/comments",
                    params={"per_page": 100, "page": page},
                )
                response.raise_for_status()
                items = response.json()
                bodies.extend(item.get("body") or "" for item in items)
                if len(items) < 100:
                    return bodies
                page += 1

    async def add_assignees(self, repo: RepositoryRef, number: int, assignees: list[str]) -> None:
        async with self._client() as client:
            response = await client.post(
                f"/repos/{repo.owner}/{repo.name}/issues/{number}/assignees",
                json={"assignees": assignees},
            )
            response.raise_for_status()

    async def check_membership(self, org: str, username: str) -> int:
        # Redirects are not followed: a 302 is itself an answer
        async with self._client() as client:
            response = await client.get(f"/orgs/{org}/members/{username}")
        logger.debug("Membership of %s in %s: HTTP %d", username, org, response.status_code)
        return response.status_code

    async def get_file_content(self, repo: RepositoryRef, path: str) -> str | None:
        async with self._client() as client:
            response = await client.get(
                f"/repos/{repo.owner}/{repo.name}/contents/{path.lstrip('/')}",
                params={"ref": repo.default_branch},
            )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        data = response.json()
        if data.get("encoding") != "base64":
            logger.warning("Unexpected encoding '%s' for %s:%s", data.get("encoding"), repo.full_name, path)
            return None
        return base64.b64decode(data["content"]).decode("utf-8")
