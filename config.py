"""
Configuration management for gutenberg-bible.
Loads settings from .env file with sensible defaults.
"""

import os
from pathlib import Path
from typing import Any, List


class Config:
    """Configuration class that loads settings from environment variables."""

    def __init__(self, env_file: str = ".env"):
        """
        Initialize configuration by loading from .env file.

        Args:
            env_file: Path to the .env file (default: .env)
        """
        self.load_env(env_file)

    def load_env(self, env_file: str) -> None:
        """
        Load environment variables from .env file.

        Args:
            env_file: Path to the .env file
        """
        env_path = Path(env_file)
        if not env_path.exists():
            return

        with open(env_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                if line.startswith('export '):
                    line = line[len('export '):]
                key, value = (part.strip() for part in line.split('=', 1))
                # Quoted values keep their inner whitespace
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                    value = value[1:-1]
                # Real environment variables win over the file
                os.environ.setdefault(key, value)

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """
        Get a configuration value from environment variables.

        Args:
            key: The environment variable name
            default: Default value if not found
            cast_type: Type to cast the value to

        Returns:
            The configuration value cast to the specified type
        """
        value = os.environ.get(key, default)

        if value is None:
            return None

        # Handle boolean casting
        if cast_type == bool:
            if isinstance(value, bool):
                return value
            return value.lower() in ('true', '1', 'yes', 'on')

        # Handle other types
        try:
            return cast_type(value)
        except (ValueError, TypeError):
            return default

    def get_list(self, key: str, default: str = "") -> List[str]:
        """
        Get a comma separated configuration value as a list.

        Args:
            key: The environment variable name
            default: Default comma separated value if not found

        Returns:
            List of non-empty, stripped items
        """
        value = self.get(key, default) or ""
        return [item.strip() for item in value.split(',') if item.strip()]

    # Input Configuration
    @property
    def bible_text_file(self) -> str:
        return self.get('BIBLE_TEXT_FILE', 'pg10.txt')

    # Output Configuration
    @property
    def output_dir(self) -> str:
        return self.get('OUTPUT_DIR', '.')

    @property
    def output_formats(self) -> List[str]:
        return self.get_list('OUTPUT_FORMATS', 'json,bin')

    # Diagnostics Configuration
    @property
    def log_level(self) -> str:
        return self.get('LOG_LEVEL', 'WARNING').upper()

    @property
    def show_progress(self) -> bool:
        return self.get('SHOW_PROGRESS', True, bool)

    @property
    def trace_events(self) -> bool:
        return self.get('TRACE_EVENTS', False, bool)


# Global config instance
config = Config()
