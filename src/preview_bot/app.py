"""Application orchestrator - wires all components and manages lifecycle."""

from __future__ import annotations

from preview_bot.config import AppConfig
from preview_bot.core.dispatcher import EventDispatcher
from preview_bot.handlers.registry import default_handlers
from preview_bot.log import get_logger
from preview_bot.messenger.discord_adapter import DiscordAdapter
from preview_bot.preview.service import MessagePreviewService

logger = get_logger(__name__)


class PreviewBotApp:
    """Top-level application orchestrator."""

    def __init__(self, config: AppConfig):
        self.config = config
        # Single shared instance; handlers receive it explicitly
        self.preview_service = MessagePreviewService(config.preview)
        self.dispatcher = EventDispatcher()
        self.adapter: DiscordAdapter | None = None

    async def start(self) -> None:
        """Register handlers and connect to Discord."""
        self.dispatcher.register_all(default_handlers(self.preview_service))

        self.adapter = DiscordAdapter(self.config, self.dispatcher)
        try:
            await self.adapter.start()
        except Exception as e:
            logger.error("bot_start_failed", error=str(e))
            raise

        logger.info(
            "preview_bot_started",
            environment=str(self.config.environment),
            events=[str(event) for event in self.dispatcher.events()],
        )

    async def stop(self) -> None:
        """Gracefully shut down."""
        if self.adapter is not None:
            try:
                await self.adapter.stop()
            except Exception as e:
                logger.error("bot_stop_error", error=str(e))
        logger.info("preview_bot_stopped")
