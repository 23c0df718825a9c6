"""Tests for configuration loading."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from preview_bot.config import AppConfig, is_unresolved, load_config
from preview_bot.core.types import Environment


def _write(tmp_path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml", tmp_path / ".env")


def test_defaults_from_empty_file(tmp_path, monkeypatch):
    monkeypatch.delenv("PREVIEW_BOT_ENV", raising=False)
    monkeypatch.setenv("DISCORD_TOKEN", "secret-token")

    config = load_config(_write(tmp_path, ""), tmp_path / ".env")

    assert config.environment == Environment.DEVELOPMENT
    assert config.discord.token == "secret-token"
    assert config.preview.max_description_length == 4096
    assert config.auth_check.enabled is False


def test_interpolates_env_vars(tmp_path, monkeypatch):
    monkeypatch.setenv("MY_TOKEN", "abc123")
    path = _write(
        tmp_path,
        "environment: production\n"
        "discord:\n  token: ${MY_TOKEN}\n  members_intent: true\n"
        "auth_check:\n  channel_id: 1\n  message_id: 2\n",
    )

    config = load_config(path, tmp_path / ".env")

    assert config.is_production
    assert config.discord.token == "abc123"
    assert config.discord.members_intent is True
    assert config.auth_check.enabled is True


def test_unset_env_var_stays_unresolved(tmp_path, monkeypatch):
    monkeypatch.delenv("DISCORD_TOKEN", raising=False)

    with patch("preview_bot.config.load_dotenv"):
        config = load_config(_write(tmp_path, "log_level: DEBUG\n"), tmp_path / ".env")

    assert is_unresolved(config.discord.token)
    assert config.log_level == "DEBUG"


def test_dotenv_skipped_in_production(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("DISCORD_TOKEN=from-file\n", encoding="utf-8")
    monkeypatch.setenv("PREVIEW_BOT_ENV", "production")

    with patch("preview_bot.config.load_dotenv") as load_dotenv:
        config = load_config(_write(tmp_path, ""), tmp_path / ".env")

    load_dotenv.assert_not_called()
    assert config.environment == Environment.PRODUCTION


def test_dotenv_loaded_in_development(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("DISCORD_TOKEN=from-file\n", encoding="utf-8")
    monkeypatch.delenv("PREVIEW_BOT_ENV", raising=False)

    with patch("preview_bot.config.load_dotenv") as load_dotenv:
        load_config(_write(tmp_path, ""), tmp_path / ".env")

    load_dotenv.assert_called_once_with(tmp_path / ".env")


def test_invalid_environment_rejected():
    with pytest.raises(ValidationError):
        AppConfig(environment="staging")
