"""Configuration management for scoper-symbols.

Loads environment variables and provides centralized config access.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

__version__ = "1.0.0"


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self):
        """Initialize config by loading .env file."""
        # Load .env from project root
        project_root = Path(__file__).parent.parent
        env_path = project_root / ".env"
        load_dotenv(env_path)

    @property
    def stubs_map_path(self) -> Optional[Path]:
        """Get the reference map location from SCOPER_STUBS_MAP.

        Points to a PhpStormStubsMap.php or JSON reference map. There is no
        fallback: loading a None path raises StubsMapError.

        Returns:
            Path to the reference map file, or None if unset
        """
        override = os.getenv("SCOPER_STUBS_MAP")
        if override:
            return Path(override).expanduser()
        return None

    @property
    def edition_label(self) -> Optional[str]:
        """Get the display label for the PHP edition, if overridden.

        Returns:
            SCOPER_PHP_EDITION value or None
        """
        return os.getenv("SCOPER_PHP_EDITION") or None


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config
