"""Port interface for the code host (GitHub REST API)."""

from abc import ABC, abstractmethod

from prbot.domain.entities.check_result import CheckResult
from prbot.domain.entities.pull_request import RepositoryRef


class CodeHostPort(ABC):
    @abstractmethod
    async def create_check(self, repo: RepositoryRef, check: CheckResult) -> None:
        """Create a completed check run.

        The host keeps only the latest run per (name, head sha), so repeating
        the call replaces the previous result.
        """
        ...

    @abstractmethod
    async def create_comment(self, repo: RepositoryRef, number: int, body: str) -> None:
        ...

    @abstractmethod
    async def list_comments(self, repo: RepositoryRef, number: int) -> list[str]:
        """Return the bodies of the existing comments on an issue or PR."""
        ...

    @abstractmethod
    async def add_assignees(
        self, repo: RepositoryRef, number: int, assignees: list[str]
    ) -> None:
        """Add assignees. The host silently skips logins that can't be assigned."""
        ...

    @abstractmethod
    async def check_membership(self, org: str, username: str) -> int:
        """Return the raw HTTP status of the organization membership query."""
        ...

    @abstractmethod
    async def get_file_content(self, repo: RepositoryRef, path: str) -> str | None:
        """Read a file from the repository's default branch. None if it doesn't exist."""
        ...
