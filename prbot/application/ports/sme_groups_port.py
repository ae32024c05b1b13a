"""Port interface for the component -> SME members mapping."""

from abc import ABC, abstractmethod

from prbot.application.ports.code_host_port import CodeHostPort
from prbot.domain.entities.pull_request import RepositoryRef


class SmeGroupsSource(ABC):
    @abstractmethod
    async def load(
        self, github: CodeHostPort, repo: RepositoryRef
    ) -> dict[str, list[str]] | None:
        """Load the mapping fresh for one evaluation. None if it can't be read."""
        ...
