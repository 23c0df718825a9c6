"""Shared fakes for discord.py objects."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

GUILD_ID = 240880736851329024
CHANNEL_ID = 518817917438001152
MESSAGE_ID = 732711501345062982
ORIGIN_CHANNEL_ID = 100

LINK = f"https://discord.com/channels/{GUILD_ID}/{CHANNEL_ID}/{MESSAGE_ID}"


def make_target(content: str = "I am the night", *, is_bot: bool = False) -> MagicMock:
    """Create a fake fetched discord.Message."""
    target = MagicMock()
    target.id = MESSAGE_ID
    target.content = content
    target.created_at = datetime(2020, 7, 14, 12, 0, tzinfo=timezone.utc)
    target.jump_url = LINK
    target.attachments = []
    target.author = MagicMock()
    target.author.bot = is_bot
    target.author.display_name = "Batman"
    target.author.color = discord.Colour(0xFFFFFF)
    target.author.display_avatar.url = "https://cdn.discordapp.com/avatars/1/a.png"
    return target


def make_channel(target: MagicMock | None = None, *, fetch_error: Exception | None = None) -> MagicMock:
    """Create a fake text channel whose fetch_message returns ``target``."""
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = CHANNEL_ID
    channel.name = "general"
    channel.fetch_message = AsyncMock(return_value=target, side_effect=fetch_error)
    return channel


def make_origin(
    content: str = LINK,
    *,
    guild_id: int | None = GUILD_ID,
    channel: MagicMock | None = None,
    is_bot: bool = False,
) -> MagicMock:
    """Create a fake inbound discord.Message posted in a guild."""
    msg = MagicMock()
    msg.content = content
    msg.author = MagicMock()
    msg.author.bot = is_bot
    msg.channel = MagicMock()
    msg.channel.id = ORIGIN_CHANNEL_ID
    msg.channel.send = AsyncMock()
    if guild_id is None:
        msg.guild = None
    else:
        msg.guild = MagicMock()
        msg.guild.id = guild_id
        msg.guild.get_channel_or_thread = MagicMock(return_value=channel)
        msg.guild.get_member = MagicMock(return_value=None)
        msg.guild.fetch_member = AsyncMock(
            side_effect=discord.NotFound(MagicMock(status=404, reason="Not Found"), "Unknown Member")
        )
    return msg


@pytest.fixture
def target() -> MagicMock:
    return make_target()


@pytest.fixture
def channel(target) -> MagicMock:
    return make_channel(target)


@pytest.fixture
def origin(channel) -> MagicMock:
    return make_origin(channel=channel)
