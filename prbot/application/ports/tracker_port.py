"""Port interface for the issue tracker."""

from abc import ABC, abstractmethod


class TrackerPort(ABC):
    @abstractmethod
    async def get_components(self, ticket: str) -> list[str] | None:
        """Return the component names of a ticket.

        Returns None if the ticket or its component field can't be resolved.
        """
        ...
