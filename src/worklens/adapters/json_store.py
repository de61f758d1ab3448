"""JSON file record store adapter."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """Raised when a collection file cannot be read."""

    pass


class JsonRecordStore:
    """
    Directory of JSON collection files.

    Implements RecordSource protocol. Each collection lives in
    ``<name>.json`` as either a bare list or an API-style wrapper object
    such as ``{"issues": [...]}``.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()

    def _path_for(self, name: str) -> Path:
        """Get the file path for a collection."""
        return self.data_dir / f"{name}.json"

    def load(self, name: str) -> list[dict[str, Any]]:
        """Load a collection. A missing file is an empty collection."""
        path = self._path_for(name)
        if not path.exists():
            logger.debug(f"No {name} collection at {path}")
            return []

        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise RecordStoreError(f"Failed to read {path}: {e}") from e

        if isinstance(data, dict):
            data = data.get(name)
            if data is None:
                return []
        if not isinstance(data, list):
            raise RecordStoreError(f"Expected a list of {name} in {path}")

        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            logger.warning(f"Skipped {len(data) - len(records)} non-object entries in {path}")
        return records

    def fetch_tasks(self) -> list[dict[str, Any]]:
        """Fetch the user's tasks."""
        return self.load("tasks")

    def fetch_issues(self) -> list[dict[str, Any]]:
        """Fetch issues raised by or assigned to the user."""
        return self.load("issues")

    def fetch_projects(self) -> list[dict[str, Any]]:
        """Fetch the user's projects."""
        return self.load("projects")

    def fetch_connections(self) -> list[dict[str, Any]]:
        """Fetch the user's connections."""
        return self.load("connections")
