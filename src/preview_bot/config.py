"""Configuration loader with YAML parsing, env-var interpolation, and Pydantic validation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from preview_bot.core.types import Environment

ENVIRONMENT_VAR = "PREVIEW_BOT_ENV"


class DiscordConfig(BaseModel):
    token: str = "${DISCORD_TOKEN}"
    members_intent: bool = False  # privileged; enable it in the developer portal first
    ready_timeout: int = 30


class PreviewConfig(BaseModel):
    max_description_length: int = 4096
    show_images: bool = True
    jump_label: str = "Jump to message"


class AuthCheckConfig(BaseModel):
    """Message fetched once after login in production to confirm API access."""

    channel_id: Optional[int] = None
    message_id: Optional[int] = None

    @property
    def enabled(self) -> bool:
        return self.channel_id is not None and self.message_id is not None


class AppConfig(BaseModel):
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    auth_check: AuthCheckConfig = Field(default_factory=AuthCheckConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


_ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)\}")


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR_NAME} patterns with environment variable values."""

    def _replace(match: re.Match) -> str:
        value = os.environ.get(match.group(1))
        if value is None:
            return match.group(0)
        return value

    return _ENV_VAR_PATTERN.sub(_replace, text)


def is_unresolved(value: str) -> bool:
    """True if ``value`` still holds a ``${VAR}`` placeholder."""
    return bool(_ENV_VAR_PATTERN.fullmatch(value.strip()))


def load_config(config_path: str | Path = "config.yaml", env_path: str | Path = ".env") -> AppConfig:
    """Load and validate configuration from YAML file with env-var interpolation.

    The .env file is only read outside production; production deployments are
    expected to provide the environment directly.
    """
    env_file = Path(env_path)
    if os.environ.get(ENVIRONMENT_VAR) != Environment.PRODUCTION and env_file.exists():
        load_dotenv(env_file)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    raw_text = config_file.read_text(encoding="utf-8")
    data = yaml.safe_load(_interpolate_env_vars(raw_text)) or {}

    # Defaults are interpolated too; DiscordConfig.token defaults to a placeholder
    discord_cfg = data.get("discord") or {}
    data["discord"] = discord_cfg
    discord_cfg["token"] = _interpolate_env_vars(discord_cfg.get("token", DiscordConfig().token))

    if ENVIRONMENT_VAR in os.environ and "environment" not in data:
        data["environment"] = os.environ[ENVIRONMENT_VAR]

    return AppConfig(**data)
