"""Configuration management for worklens."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.worklist import WORKLIST_LIMIT, WorklistMode

logger = logging.getLogger(__name__)

WORKLENS_HOME = Path(os.environ.get("WORKLENS_HOME", Path.home() / "worklens"))
CONFIG_FILE = WORKLENS_HOME / "config" / "worklens.conf"
DATA_DIR = WORKLENS_HOME / "data"


@dataclass
class Config:
    """worklens configuration."""

    data_dir: str = ""
    user_id: str = ""
    user_name: str = ""
    worklist_limit: int = WORKLIST_LIMIT
    default_mode: str = WorklistMode.TASKS.value

    @property
    def resolved_data_dir(self) -> Path:
        """Configured data directory, else the default under WORKLENS_HOME."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from worklens.conf file."""
    path = path or CONFIG_FILE
    config = Config()

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "user_id":
                config.user_id = value
            case "user_name":
                config.user_name = value
            case "worklist_limit":
                try:
                    limit = int(value)
                except ValueError:
                    logger.warning(f"Invalid WORKLIST_LIMIT {value!r}, using {WORKLIST_LIMIT}")
                    continue
                if 0 <= limit <= WORKLIST_LIMIT:
                    config.worklist_limit = limit
                else:
                    logger.warning(f"WORKLIST_LIMIT must be 0..{WORKLIST_LIMIT}, got {limit}")
            case "default_mode":
                modes = {m.value for m in WorklistMode}
                if value.lower() in modes:
                    config.default_mode = value.lower()
                else:
                    logger.warning(f"Invalid DEFAULT_MODE {value!r}, expected one of {sorted(modes)}")
            case _:
                logger.debug(f"Ignoring unknown config key {key!r}")

    return config
