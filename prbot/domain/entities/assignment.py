"""SME groups and the reviewer assignment derived from them."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SmeGroup:
    component: str
    members: tuple[str, ...] = ()


@dataclass
class AssignmentDecision:
    assignees: list[str] = field(default_factory=list)
    explanation: str = ""
    groups: list[SmeGroup] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.assignees
