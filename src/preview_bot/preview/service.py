"""Message preview service: resolves a linked message and posts it as an embed."""

from __future__ import annotations

import re

import aiohttp
import discord

from preview_bot.config import PreviewConfig
from preview_bot.log import get_logger
from preview_bot.preview.link_detector import MESSAGE_LINK_PATTERN
from preview_bot.preview.models import LinkIdentifiers

logger = get_logger(__name__)

HYPERLINK_PATTERN = re.compile(r"\[(.*?)\]\((.*?)\)")
SNOWFLAKE_PATTERN = re.compile(r"[0-9]+")
ELLIPSIS = "…"


class MessagePreviewService:
    """Turns a message link into a preview embed posted next to the link.

    One instance is built at startup and shared by every handler; it keeps no
    state between calls. Every failure before the final send ends the preview
    silently, so a bad link never produces noise in the channel.
    """

    def __init__(self, config: PreviewConfig | None = None):
        self._config = config or PreviewConfig()

    async def generate_preview(self, link: str, message: discord.Message) -> None:
        ids = self.parse_link(link)
        if ids is None:
            logger.debug("preview_malformed_link", link=link)
            return

        guild = message.guild
        if guild is None:
            return

        # Lookup stays inside the origin guild; the link's guild id is never used to resolve.
        channel = guild.get_channel_or_thread(int(ids.channel_id))
        if channel is None or not isinstance(channel, discord.abc.Messageable):
            logger.debug("preview_channel_not_visible", channel_id=ids.channel_id, guild_id=guild.id)
            return

        if not self.verify_guild(message, ids.guild_id):
            logger.debug("preview_guild_mismatch", link_guild_id=ids.guild_id, guild_id=guild.id)

        try:
            target = await channel.fetch_message(int(ids.message_id))
        except (discord.HTTPException, aiohttp.ClientError) as e:
            logger.debug("preview_fetch_failed", message_id=ids.message_id, error=str(e))
            return

        if target.author.bot:
            logger.debug("preview_skipped_bot_author", message_id=ids.message_id)
            return

        colour = await self.resolve_colour(guild, target.author)
        embed = self.build_embed(target, channel, colour=colour)
        await message.channel.send(embed=embed)
        logger.info(
            "preview_sent",
            channel_id=message.channel.id,
            source_channel_id=ids.channel_id,
            message_id=ids.message_id,
        )

    def verify_guild(self, message: discord.Message, guild_id: str) -> bool:
        if message.guild is None:
            return False
        return str(message.guild.id) == str(guild_id)

    def strip_link(self, link: str) -> list[str]:
        """Return the guild, channel and message id segments of ``link``."""
        return link.split("/")[-3:]

    def parse_link(self, link: str) -> LinkIdentifiers | None:
        """Parse a message link into ids, or None if the path is malformed.

        Any host variant the detector recognizes is accepted.
        """
        match = MESSAGE_LINK_PATTERN.match(link or "")
        if match is None or len(link[match.end():].split("/")) != 3:
            return None

        ids = LinkIdentifiers.from_segments(self.strip_link(link))
        if ids is None:
            return None
        if not (SNOWFLAKE_PATTERN.fullmatch(ids.channel_id) and SNOWFLAKE_PATTERN.fullmatch(ids.message_id)):
            return None
        return ids

    async def resolve_colour(self, guild: discord.Guild, author: discord.abc.User) -> discord.Colour:
        """Return the author's current display colour in ``guild``.

        Fetched messages usually carry a plain User, so the member is looked up
        in the cache first and then over the API. Falls back to ``author.color``
        when the author is no longer a member.
        """
        member = guild.get_member(author.id)
        if member is None:
            try:
                member = await guild.fetch_member(author.id)
            except (discord.HTTPException, aiohttp.ClientError) as e:
                logger.debug("preview_member_lookup_failed", user_id=author.id, error=str(e))
                return author.color
        return member.color

    def serialize_hyperlinks(self, text: str | None) -> str | None:
        """Escape every ``[label](url)`` so it renders as plain text."""
        if not text:
            return text
        return HYPERLINK_PATTERN.sub(r"\\[\1\\]\\(\2\\)", text)

    def build_embed(
        self,
        target: discord.Message,
        channel: discord.abc.Messageable,
        colour: discord.Colour | None = None,
    ) -> discord.Embed:
        author = target.author
        embed = discord.Embed(
            description=self._truncate(self.serialize_hyperlinks(target.content)),
            colour=colour if colour is not None else author.color,
            timestamp=target.created_at,
        )
        embed.set_author(name=author.display_name, icon_url=author.display_avatar.url)
        embed.add_field(
            name="\u200b",
            value=f"[{self._config.jump_label}]({target.jump_url})",
            inline=False,
        )
        embed.set_footer(text=f"#{getattr(channel, 'name', channel)}")

        if self._config.show_images:
            for attachment in target.attachments:
                if (attachment.content_type or "").startswith("image/"):
                    embed.set_image(url=attachment.url)
                    break

        return embed

    def _truncate(self, text: str | None) -> str | None:
        limit = self._config.max_description_length
        if not text or len(text) <= limit:
            return text
        return text[: limit - len(ELLIPSIS)] + ELLIPSIS
