"""Port interface for chat notifications."""

from abc import ABC, abstractmethod

from prbot.domain.value_objects.enums import Severity


class NotifierPort(ABC):
    @abstractmethod
    async def send(self, message: str, severity: Severity, details: str | None = None) -> None:
        """Send a message to the team channel (notifications) or debug channel (the rest)."""
        ...

    async def notify(self, message: str) -> None:
        await self.send(message, Severity.NOTIFICATION)

    async def warn(self, message: str, details: str | None = None) -> None:
        await self.send(message, Severity.WARNING, details)

    async def error(self, message: str, details: str | None = None) -> None:
        await self.send(message, Severity.ERROR, details)
