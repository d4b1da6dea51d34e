"""Configuration management for gqlv."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_SCHEMA_CACHE_DIR = "~/.gqlv/schemas"


@dataclass
class Config:
    """Configuration for gqlv."""

    default_url: Optional[str] = None
    token: Optional[str] = None
    schema_cache_dir: str = DEFAULT_SCHEMA_CACHE_DIR
    validate_unknown_types: bool = True

    def __post_init__(self):
        """Expand paths after initialization."""
        self.schema_cache_dir = str(Path(self.schema_cache_dir).expanduser())


def get_default_config_path() -> str:
    """Get default config file path."""
    return str(Path("~/.gqlv/config.yaml").expanduser())


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    # Return defaults if config doesn't exist
    if not Path(config_path).exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return Config(
        default_url=data.get("default_url"),
        token=data.get("token"),
        schema_cache_dir=data.get("schema_cache_dir", DEFAULT_SCHEMA_CACHE_DIR),
        validate_unknown_types=bool(data.get("validate_unknown_types", True)),
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    Path(path).parent.mkdir(parents=True, exist_ok=True)

    example = {
        "default_url": "https://graphql.example.com/graphql",
        "token": None,
        "schema_cache_dir": DEFAULT_SCHEMA_CACHE_DIR,
        "validate_unknown_types": True,
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
