#!/usr/bin/env python3
"""
Shared configuration utility for the study plan exporter.

Provides flexible .env file discovery and export settings for both the
command-line tool and the HTTP endpoint.
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import List, Optional


ENV_FILENAME = ".env.studyplan"


class ConfigManager:
    """
    Centralized configuration management for study plan export.

    Features:
    - Flexible .env file discovery (current dir + up to 2 parent dirs)
    - Export defaults (output directory, sheet name, base filename)
    - Typed environment variable helpers
    """

    def __init__(self):
        self._env_loaded = False
        self._env_path: Optional[Path] = None
        self.load_environment()

    def load_environment(self) -> bool:
        """
        Search for and load .env file with flexible path discovery.

        Search order:
        1. Current working directory
        2. One level up (parent directory)
        3. Two levels up (grandparent directory)

        Returns:
            bool: True if .env file was found and loaded, False otherwise
        """
        if self._env_loaded:
            return True

        search_paths = [
            Path.cwd(),
            Path.cwd().parent,
            Path.cwd().parent.parent
        ]

        for search_path in search_paths:
            env_file = search_path / ENV_FILENAME
            if env_file.exists() and env_file.is_file():
                print(f"Loading {ENV_FILENAME} from: {env_file}")
                load_dotenv(env_file, override=True)
                self._env_path = env_file
                self._env_loaded = True
                return True

        return False

    def get_output_dir(self) -> Path:
        """
        Get directory where exported workbooks are written.

        Returns:
            Path: EXPORT_OUTPUT_DIR or "exports"
        """
        return Path(os.getenv("EXPORT_OUTPUT_DIR", "exports"))

    def get_sheet_name(self) -> str:
        """Worksheet title used for exported plans."""
        return os.getenv("EXPORT_SHEET_NAME", "Study Plan")

    def get_default_filename(self) -> str:
        """Base filename (no extension) used when none is given."""
        return os.getenv("EXPORT_DEFAULT_FILENAME", "StudyPlan")

    def get_cors_origins(self) -> List[str]:
        """
        Get allowed CORS origins for the HTTP endpoint.

        Returns:
            List[str]: Comma-separated CORS_ORIGINS split into a list
        """
        origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
        return [origin.strip() for origin in origins.split(",") if origin.strip()]

    def get_env_int(self, key: str, default: int) -> int:
        """
        Get integer environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found or invalid

        Returns:
            int: Environment variable value or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            print(f"Warning: Invalid integer value for {key}, using default {default}")
            return default

    def get_env_bool(self, key: str, default: bool) -> bool:
        """
        Get boolean environment variable.

        Returns:
            bool: True if value is 'true', '1', 'yes', 'on' (case-insensitive)
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')


# Global singleton instance for easy import
config = ConfigManager()


def get_env_int(key: str, default: int) -> int:
    """Convenience function for getting integer environment variable."""
    return config.get_env_int(key, default)


def get_env_bool(key: str, default: bool) -> bool:
    """Convenience function for getting boolean environment variable."""
    return config.get_env_bool(key, default)
