"""Settings Manager - Handles library location and logging configuration."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_LIBRARY_FILENAME = "library.json"
DEFAULT_LOG_LEVEL = "INFO"


class SettingsManager:
    """
    Manages application settings.

    Reads BOOKKEEP_LIBRARY_PATH and BOOKKEEP_LOG_LEVEL from the environment,
    after loading the .env file in the project root.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_library_path(self) -> Path:
        """Path of the JSON library file. Relative paths resolve against the project root."""
        raw = os.getenv("BOOKKEEP_LIBRARY_PATH")
        if not raw or not raw.strip():
            return self._project_root / DEFAULT_LIBRARY_FILENAME
        path = Path(raw.strip()).expanduser()
        return path if path.is_absolute() else self._project_root / path

    def get_log_level(self) -> int:
        """Configured logging level, falling back to INFO for unknown names."""
        name = (os.getenv("BOOKKEEP_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=self.get_log_level(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
