"""Interface for the admin events backends used by the lifecycle manager."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models import Event


class BackendError(Exception):
    """A list/create/delete call against the admin backend failed."""


class EventsBackend(ABC):
    """List/create/delete operations of the admin events endpoint."""

    @abstractmethod
    def list_events(self) -> List[Event]:
        """Returns every event, ascending by date.

        Raises:
            BackendError: when the backend cannot be reached or fails
        """

    @abstractmethod
    def create_event(self, payload: Dict[str, Any]) -> List[Event]:
        """Creates one event from ``{event_date, title, time?, venue?}``.

        Returns:
            The created record(s)
        """

    @abstractmethod
    def delete_event(self, event_id: int) -> None:
        """Deletes an event. Deleting an unknown id is not an error."""
