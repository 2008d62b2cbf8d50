"""Services layer - application orchestration and configuration."""

from .library_service import LibraryService
from .settings_manager import SettingsManager

__all__ = ["LibraryService", "SettingsManager"]
