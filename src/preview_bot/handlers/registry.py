"""Static list of built-in event handlers."""

from __future__ import annotations

from preview_bot.handlers.base import EventHandler
from preview_bot.handlers.message_link import MessageLinkHandler
from preview_bot.preview.service import MessagePreviewService


def default_handlers(preview_service: MessagePreviewService) -> list[EventHandler]:
    """Return every built-in handler, in dispatch order."""
    return [
        MessageLinkHandler(preview_service),
    ]
