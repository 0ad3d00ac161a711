"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (git subprocess) and services read config the same way.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "open-in-ado"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "open-in-ado"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "open-in-ado"
    return Path.home() / ".config" / "open-in-ado"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write/update variables in the user-level .env file."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# open-in-ado user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Defaults reproduce the plain `git remote get-url origin` behavior; every
    field can be overridden with an `OPEN_IN_ADO_*` variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPEN_IN_ADO_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first, then the user-level config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    git_executable: str = Field(
        default="git",
        min_length=1,
        description="git binary to run (name on PATH or absolute path).",
    )
    git_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=600,
        description="Timeout for each git query (seconds).",
    )
    remote_name: str = Field(
        default="origin",
        min_length=1,
        description="Remote whose URL is used as the web viewer base.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level
