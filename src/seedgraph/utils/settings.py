"""
Settings management for seedgraph
"""

import json
import os
from dataclasses import dataclass, asdict
from typing import Optional

CONFIG_ENV = "SEEDGRAPH_CONFIG"
CONFIG_DIR = os.path.expanduser("~/.config/seedgraph")
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.json")


def get_config_file() -> str:
    """Path of the settings file, honouring SEEDGRAPH_CONFIG."""
    return os.environ.get(CONFIG_ENV) or CONFIG_FILE


@dataclass
class Settings:
    """Package settings"""

    # Zero-padded width of the counter in sequential identifiers
    id_counter_width: int = 6

    # Text between the entity kind and the counter ("account-000001")
    id_separator: str = "-"

    # DuckDB database used when no path is given explicitly
    database_path: str = ":memory:"

    def save(self, path: Optional[str] = None):
        """Save settings to config file"""
        path = path or get_config_file()
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Settings":
        """Load settings from config file, or return defaults"""
        path = path or get_config_file()
        if not os.path.exists(path):
            return cls()

        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return cls()

        if not isinstance(data, dict):
            return cls()

        # Filter to only known fields (ignore obsolete settings)
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}

        return cls(**filtered_data)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def save_settings():
    """Save the global settings"""
    if _settings is not None:
        _settings.save()


def reset_settings():
    """Drop the cached global settings so the next access reloads them"""
    global _settings
    _settings = None
