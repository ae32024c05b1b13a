"""CheckResult - a named status report attached to one commit."""

from dataclasses import dataclass

from prbot.domain.value_objects.enums import CheckConclusion


@dataclass(frozen=True)
class CheckResult:
    name: str
    conclusion: CheckConclusion
    summary: str
    head_sha: str
    title: str = ""

    def describe(self) -> str:
        """Everything that would be sent to the host, for dry-run logs."""
        return (
            f"name: {self.name}\n"
            f"conclusion: {self.conclusion.value}\n"
            f"head_sha: {self.head_sha}\n"
            f"summary: {self.summary}"
        )
