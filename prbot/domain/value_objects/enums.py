"""Domain enums - pure Python, no external dependencies."""

from enum import Enum


class EventType(str, Enum):
    PR_OPENED = "pull_request.opened"
    PR_EDITED = "pull_request.edited"
    PR_SYNCHRONIZE = "pull_request.synchronize"


class CheckConclusion(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    NEUTRAL = "neutral"


class Severity(str, Enum):
    NOTIFICATION = "notification"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> str:
        return _SEVERITY_COLORS[self]

    def is_debug(self) -> bool:
        """Warnings and errors go to the operator channel, not the team channel."""
        return self != Severity.NOTIFICATION


_SEVERITY_COLORS = {
    Severity.NOTIFICATION: "#2589CF",
    Severity.WARNING: "#DEB109",
    Severity.ERROR: "#9A2925",
}


class MembershipStatus(str, Enum):
    MEMBER = "member"
    NOT_MEMBER = "not_member"
    UNKNOWN = "unknown"
