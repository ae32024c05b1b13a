"""SME groups read from a local JSON file.

Format: ``{"Cache and eviction": ["alice", "bob"], "Logging": ["carol"]}``
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from prbot.application.ports.code_host_port import CodeHostPort
from prbot.application.ports.sme_groups_port import SmeGroupsSource
from prbot.config import settings
from prbot.domain.entities.pull_request import RepositoryRef

logger = logging.getLogger(__name__)


def parse_sme_groups(text: str, source: str) -> dict[str, list[str]] | None:
    """Parse and validate the mapping. None (with a log line) if it's malformed."""
    try:
        raw: Any = json.loads(text)
    except ValueError:
        logger.exception("SME groups in %s are not valid JSON", source)
        return None

    if not isinstance(raw, dict):
        logger.error("SME groups in %s must be a JSON object, got %s", source, type(raw).__name__)
        return None

    groups: dict[str, list[str]] = {}
    for component, members in raw.items():
        if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
            logger.warning("Ignoring SME group '%s' in %s: members must be a list of logins", component, source)
            continue
        groups[component] = members
    return groups


class FileSmeGroupsSource(SmeGroupsSource):
    def __init__(self, path: str | Path | None = None):
        self._path = Path(path if path is not None else settings.sme_groups_file)

    async def load(self, github: CodeHostPort, repo: RepositoryRef) -> dict[str, list[str]] | None:
        if not await asyncio.to_thread(self._path.exists):
            logger.warning("SME groups file %s does not exist", self._path)
            return None
        try:
            text = await asyncio.to_thread(self._path.read_text, "utf-8")
        except OSError:
            logger.exception("Could not read SME groups file %s", self._path)
            return None
        return parse_sme_groups(text, str(self._path))
