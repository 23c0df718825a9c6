"""Abstract event handler interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from preview_bot.core.types import EventType


class EventHandler(ABC):
    """Base class for handlers routed by the event dispatcher.

    Each handler serves exactly one event type.
    """

    @property
    @abstractmethod
    def event(self) -> EventType:
        """The event tag this handler is registered under."""
        ...

    @abstractmethod
    async def handle(self, *args: Any) -> None:
        """Process one event; arguments are the platform's event payload."""
        ...

    @property
    def name(self) -> str:
        return type(self).__name__
