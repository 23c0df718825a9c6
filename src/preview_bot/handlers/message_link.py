"""Handler that previews messages linked in chat."""

from __future__ import annotations

import discord

from preview_bot.core.types import EventType
from preview_bot.handlers.base import EventHandler
from preview_bot.log import get_logger
from preview_bot.preview.link_detector import find_message_link
from preview_bot.preview.service import MessagePreviewService

logger = get_logger(__name__)


class MessageLinkHandler(EventHandler):
    """Posts a preview for the first message link in each new guild message."""

    def __init__(self, preview_service: MessagePreviewService):
        self._preview_service = preview_service

    @property
    def event(self) -> EventType:
        return EventType.MESSAGE_CREATE

    async def handle(self, message: discord.Message) -> None:
        if message.author.bot or message.guild is None:
            return

        link = find_message_link(message.content)
        if link is None:
            return

        logger.debug("message_link_detected", link=link, channel_id=message.channel.id)
        await self._preview_service.generate_preview(link, message)
