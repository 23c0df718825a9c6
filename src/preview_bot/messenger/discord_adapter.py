"""Discord client adapter using discord.py v2+."""

from __future__ import annotations

import asyncio
from typing import Any

import discord

from preview_bot.config import AppConfig, is_unresolved
from preview_bot.core.dispatcher import EventDispatcher
from preview_bot.core.types import EventType
from preview_bot.log import get_logger

logger = get_logger(__name__)


class DiscordAdapter:
    """Owns the discord.py session and feeds its events to the dispatcher."""

    def __init__(self, config: AppConfig, dispatcher: EventDispatcher):
        self.config = config
        self._dispatcher = dispatcher
        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = config.discord.members_intent
        self._client = discord.Client(intents=intents)
        self._task: asyncio.Task[Any] | None = None
        self._ready = asyncio.Event()

        @self._client.event
        async def on_ready() -> None:
            logger.info("discord_client_ready", user=str(self._client.user))
            self._ready.set()

        @self._client.event
        async def on_message(message: discord.Message) -> None:
            await self._on_discord_message(message)

    @property
    def client(self) -> discord.Client:
        return self._client

    async def start(self) -> None:
        token = self.config.discord.token
        if not token or is_unresolved(token):
            raise ValueError("You must supply the DISCORD_TOKEN environment variable.")

        self._task = asyncio.create_task(self._client.start(token))
        try:
            await asyncio.wait_for(self._ready.wait(), timeout=self.config.discord.ready_timeout)
        except asyncio.TimeoutError:
            logger.warning("discord_ready_timeout", timeout=self.config.discord.ready_timeout)

        logger.info("discord_adapter_started", user=str(self._client.user))

        if self.config.is_production and self.config.auth_check.enabled:
            await self._run_auth_check()

    async def stop(self) -> None:
        await self._client.close()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except (asyncio.CancelledError, Exception):
                pass
        logger.info("discord_adapter_stopped")

    async def _on_discord_message(self, message: discord.Message) -> None:
        if message.author == self._client.user:
            return
        await self._dispatcher.dispatch(EventType.MESSAGE_CREATE, message)

    async def _run_auth_check(self) -> None:
        """Fetch the configured message once to confirm the session can read channels."""
        check = self.config.auth_check
        try:
            channel = await self._client.fetch_channel(check.channel_id)
            await channel.fetch_message(check.message_id)  # type: ignore[union-attr]
        except (discord.HTTPException, AttributeError) as e:
            logger.error(
                "discord_auth_check_failed",
                channel_id=check.channel_id,
                message_id=check.message_id,
                error=str(e),
            )
            return
        logger.info("discord_auth_check_passed", channel_id=check.channel_id)
