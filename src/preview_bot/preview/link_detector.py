"""Detection of Discord message links in free-form chat text."""

from __future__ import annotations

import re

# Scheme + host, with or without the ptb. subdomain and the legacy "app" infix
MESSAGE_LINK_PATTERN = re.compile(r"https://(ptb\.)?discord(app)?\.com/channels/")
CANONICAL_PREFIX = "https://discord.com/channels/"

# Fits the prefix plus three ids of up to 18 digits; a 19-digit message id is cut short
MAX_LINK_LENGTH = 85

_TOKEN_PATTERN = re.compile(r"\S+")


def _enclosing_token(text: str, index: int) -> str:
    """Return the whitespace-delimited token of ``text`` that contains ``index``."""
    for token in _TOKEN_PATTERN.finditer(text):
        if token.start() <= index < token.end():
            return token.group(0)
    return ""


def is_suppressed(text: str, index: int) -> bool:
    """True if the link at ``index`` is wrapped in ``<...>`` to hide its embed."""
    token = _enclosing_token(text, index)
    return token.startswith("<") and token.endswith(">")


def normalize_link(raw: str) -> str:
    """Collapse the host to its canonical form and drop trailing text."""
    words = raw.split(maxsplit=1)
    link = MESSAGE_LINK_PATTERN.sub(CANONICAL_PREFIX, words[0] if words else "", count=1)
    return link[:MAX_LINK_LENGTH]


def find_message_link(text: str | None) -> str | None:
    """Return the first unsuppressed message link in ``text``, normalized.

    Returns None when the text holds no link, or only suppressed ones.
    """
    if not text:
        return None

    for match in MESSAGE_LINK_PATTERN.finditer(text):
        if is_suppressed(text, match.start()):
            continue
        return normalize_link(text[match.start():])

    return None
