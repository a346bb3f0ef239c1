import os
from dataclasses import dataclass
from typing import Optional

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class Settings:
    """Server settings, read from the environment (and a .env file when present)."""
    story_file: str = "gopher.json"
    port: int = 3000
    host: str = "0.0.0.0"
    template_file: Optional[str] = None
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        """
        Raises:
            ValueError: If STORY_PORT is not an integer or LOG_LEVEL is not a known level
        """
        port = os.getenv("STORY_PORT", "3000")
        try:
            port = int(port)
        except ValueError:
            raise ValueError(f"STORY_PORT must be an integer, got '{port}'")

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'")

        return Settings(
            story_file=os.getenv("STORY_FILE", "gopher.json"),
            port=port,
            host=os.getenv("STORY_HOST", "0.0.0.0"),
            template_file=os.getenv("STORY_TEMPLATE") or None,
            log_level=log_level,
        )
