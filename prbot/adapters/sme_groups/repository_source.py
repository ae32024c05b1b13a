"""SME groups read from a JSON file on the repository's default branch."""

from __future__ import annotations

import logging

from prbot.adapters.sme_groups.file_source import parse_sme_groups
from prbot.application.ports.code_host_port import CodeHostPort
from prbot.application.ports.sme_groups_port import SmeGroupsSource
from prbot.domain.entities.pull_request import RepositoryRef

logger = logging.getLogger(__name__)


class RepositorySmeGroupsSource(SmeGroupsSource):
    def __init__(self, path: str):
        self._path = path

    async def load(self, github: CodeHostPort, repo: RepositoryRef) -> dict[str, list[str]] | None:
        text = await github.get_file_content(repo, self._path)
        if text is None:
            logger.warning("SME groups file %s not found in %s", self._path, repo.full_name)
            return None
        return parse_sme_groups(text, f"{repo.full_name}:{self._path}")
