"""
Shell Configuration

Settings come from a TOML file. Keys are matched case-insensitively, so
`Awaited = 120` and `awaited = 120` both work. FESTPLAN_* environment
variables fill in anything the file leaves out. They are named after the
field, so the schema file comes from `FESTPLAN_SCHEMA_PATH`.
"""

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings

from festplan.errors import ConfigError

DEFAULT_CONFIG_PATH = "config.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# TOML key -> settings field, where they differ
FILE_KEYS = {
    "schema": "schema_path",
}


class Settings(BaseSettings):
    """Shell settings."""

    # Planning
    awaited: int = Field(..., gt=0, description="Expected guest count")
    current: str = Field(..., min_length=1, description="Date of the fest being planned")

    # Storage
    database: str = "./fest.sqlite"
    schema_path: Optional[str] = None  # Only used when the database is created

    # Logging
    log_level: str = "WARNING"

    class Config:
        env_prefix = "FESTPLAN_"
        case_sensitive = False

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v


def load_settings(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """Load and validate settings. Any problem is a ConfigError."""
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(
            f"Config file at location {config_path} not found",
            details={"config": config_path},
        )

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            f"Config file {config_path} is not valid TOML: {e}",
            details={"config": config_path},
        )

    values = {}
    for key, value in data.items():
        key = key.lower()
        values[FILE_KEYS.get(key, key)] = value

    try:
        return Settings(**values)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(
            f"Invalid configuration in {config_path}: {problems}",
            details={"config": config_path},
        )
