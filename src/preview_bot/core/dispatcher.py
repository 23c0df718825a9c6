"""Routes platform events to the handlers registered for them."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any

from preview_bot.core.types import EventType
from preview_bot.log import get_logger

if TYPE_CHECKING:
    from preview_bot.handlers.base import EventHandler

logger = get_logger(__name__)


class EventDispatcher:
    """Maps each event type to an ordered list of handlers."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[EventHandler]] = defaultdict(list)

    def register(self, handler: EventHandler) -> None:
        self._handlers[handler.event].append(handler)
        logger.info("handler_registered", handler=handler.name, event_type=str(handler.event))

    def register_all(self, handlers: list[EventHandler]) -> None:
        for handler in handlers:
            self.register(handler)

    def handlers_for(self, event: EventType) -> list[EventHandler]:
        return list(self._handlers.get(event, []))

    def events(self) -> list[EventType]:
        return [event for event, handlers in self._handlers.items() if handlers]

    async def dispatch(self, event: EventType, *args: Any) -> None:
        """Run every handler for ``event`` in order.

        A failing handler is logged and skipped so the event loop and the
        remaining handlers keep running.
        """
        for handler in self.handlers_for(event):
            try:
                await handler.handle(*args)
            except Exception as e:
                logger.error(
                    "event_handler_error",
                    handler=handler.name,
                    event_type=str(event),
                    error=str(e),
                    exc_info=True,
                )
