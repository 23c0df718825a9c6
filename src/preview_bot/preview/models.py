"""Value types used while building a message preview."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class LinkIdentifiers:
    """Guild, channel and message ids taken from a message link path."""

    guild_id: str
    channel_id: str
    message_id: str

    @classmethod
    def from_segments(cls, segments: Sequence[str]) -> LinkIdentifiers | None:
        """Build from exactly three non-empty segments, or return None."""
        if len(segments) != 3 or not all(segments):
            return None
        guild_id, channel_id, message_id = segments
        return cls(guild_id=guild_id, channel_id=channel_id, message_id=message_id)
