"""Pull request snapshot - the subset of a webhook payload the rules read."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    name: str
    default_branch: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class PullRequestSnapshot:
    number: int
    title: str
    head_sha: str
    base_ref: str
    author: str
    url: str
    repository: RepositoryRef

    def targets_branch(self, branch: str) -> bool:
        return self.base_ref == branch
