"""Discord embed builders for the todo bot.

Each builder takes a platform-neutral payload and returns a styled embed
ready to send.
"""

from __future__ import annotations

import discord

from todobot.core.responses import Response

EMBED_DESCRIPTION_LIMIT = 4096
FOOTER_TEXT = "Team Todo"


def _truncate(text: str, limit: int = EMBED_DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def build_response_embed(response: Response) -> discord.Embed:
    """Build the embed for a handler Response."""
    embed = discord.Embed(
        title=response.title,
        description=_truncate(response.description) or None,
        color=response.color,
    )
    embed.set_footer(text=FOOTER_TEXT)
    return embed
