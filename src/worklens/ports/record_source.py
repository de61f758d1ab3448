"""Record source interface."""

from typing import Any, Protocol


class RecordSource(Protocol):
    """Interface for loading raw record collections from any backend."""

    def fetch_tasks(self) -> list[dict[str, Any]]:
        """Fetch the user's tasks."""
        ...

    def fetch_issues(self) -> list[dict[str, Any]]:
        """Fetch issues raised by or assigned to the user."""
        ...

    def fetch_projects(self) -> list[dict[str, Any]]:
        """Fetch the user's projects."""
        ...

    def fetch_connections(self) -> list[dict[str, Any]]:
        """Fetch the user's connections."""
        ...
