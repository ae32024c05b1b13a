"""Tests for the file and repository SME group sources."""

import json
import threading
from pathlib import Path

import pytest

from prbot.adapters.sme_groups.file_source import FileSmeGroupsSource, parse_sme_groups
from prbot.adapters.sme_groups.repository_source import RepositorySmeGroupsSource
from prbot.domain.entities.pull_request import RepositoryRef

REPO = RepositoryRef(owner="wiredtiger", name="wiredtiger", default_branch="develop")
GROUPS = {"Cache and eviction": ["alice", "bob"], "Logging": ["bob", "carol"]}


@pytest.mark.asyncio
async def test_file_source_reads_mapping(tmp_path, github):
    path = tmp_path / "sme_groups.json"
    path.write_text(json.dumps(GROUPS))
    assert await FileSmeGroupsSource(path).load(github, REPO) == GROUPS


@pytest.mark.asyncio
async def test_file_source_reloads_each_time(tmp_path, github):
    path = tmp_path / "sme_groups.json"
    path.write_text(json.dumps(GROUPS))
    source = FileSmeGroupsSource(path)
    await source.load(github, REPO)
    path.write_text(json.dumps({"Logging": ["dave"]}))
    assert await source.load(github, REPO) == {"Logging": ["dave"]}


@pytest.mark.asyncio
async def test_file_source_missing_file(tmp_path, github):
    assert await FileSmeGroupsSource(tmp_path / "absent.json").load(github, REPO) is None


def test_parse_rejects_invalid_json():
    assert parse_sme_groups("{not json", "test") is None
    assert parse_sme_groups("[]", "test") is None


def test_parse_skips_bad_groups():
    text = json.dumps({"Logging": ["carol"], "Broken": "alice", "Mixed": ["a", 1]})
    assert parse_sme_groups(text, "test") == {"Logging": ["carol"]}


@pytest.mark.asyncio
async def test_repository_source(github_factory):
    github = github_factory(files={"tools/sme_groups.json": json.dumps(GROUPS)})
    source = RepositorySmeGroupsSource("tools/sme_groups.json")
    assert await source.load(github, REPO) == GROUPS

    missing = RepositorySmeGroupsSource("absent.json")
    assert await missing.load(github, REPO) is None


@pytest.mark.asyncio
async def test_file_source_reads_off_the_event_loop(tmp_path, github, monkeypatch):
    path = tmp_path / "sme_groups.json"
    path.write_text(json.dumps(GROUPS))
    on_main_thread = []
    original = Path.read_text

    def recording_read_text(self, *args, **kwargs):
        on_main_thread.append(threading.current_thread() is threading.main_thread())
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", recording_read_text)
    assert await FileSmeGroupsSource(path).load(github, REPO) == GROUPS
    assert on_main_thread == [False]
