"""Discord bot for the team todo list.

Runs alongside FastAPI using the same event loop. Every slash command and
button click is reduced to an InboundEvent, routed to exactly one handler,
and the handler's Response is sent back as an embed.

The bot is optional: if DISCORD_BOT_TOKEN is not set, nothing starts.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord
from discord import Intents
from discord.ext import commands

from todobot.core.handlers import TodoHandlers
from todobot.core.router import InteractionRouter
from todobot.core.store import GuildStore
from todobot.core.workflow import WorkflowCorrelator
from todobot.discord.commands import TodoCommandTree, build_todo_group
from todobot.discord.embeds import build_response_embed
from todobot.discord.helpers import event_from_interaction
from todobot.discord.moderation import contains_flagged_word, language_reminder
from todobot.discord.views import TeamSelectView

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from todobot.config import Settings
    from todobot.core.responses import Response

logger = logging.getLogger(__name__)


class TodoBot(commands.Bot):
    """The team todo Discord bot.

    Owns the InteractionRouter and everything behind it: the per-guild
    store and the add-workflow correlator.
    """

    def __init__(self, settings: Settings, engine: AsyncEngine) -> None:
        intents = Intents.default()
        intents.message_content = settings.todobot_language_filter_enabled

        super().__init__(
            command_prefix="!",
            intents=intents,
            tree_cls=TodoCommandTree,
            description="Team Todo -- a shared todo list for every team in the server.",
        )
        self.settings = settings
        self.engine = engine
        self.store = GuildStore(engine)
        self.correlator = WorkflowCorrelator(
            settings.todobot_session_ttl_seconds,
            enforce_initiator=settings.todobot_enforce_initiator,
        )
        self.router = InteractionRouter(
            TodoHandlers.from_store(self.store, self.correlator),
            client=self,
        )
        self.tree.add_command(build_todo_group())
        self.run_task: asyncio.Task[None] | None = None

    async def setup_hook(self) -> None:
        """Called when the bot is ready to start. Syncs slash commands."""
        if self.settings.discord_guild_id:
            guild = discord.Object(id=int(self.settings.discord_guild_id))
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            logger.info("discord_commands_synced guild_id=%s", self.settings.discord_guild_id)
        else:
            await self.tree.sync()
            logger.info("discord_commands_synced globally")

    async def on_ready(self) -> None:
        user = self.user
        name = user.name if user else "unknown"
        logger.info("discord_bot_ready user=%s", name)

    async def on_message(self, message: discord.Message) -> None:
        """Remind members to keep chat civil when a flagged word shows up."""
        if message.author.bot or not self.settings.todobot_language_filter_enabled:
            return
        if not contains_flagged_word(message.content):
            return
        try:
            await message.channel.send(language_reminder(message.author.mention))
        except discord.HTTPException:
            logger.exception("language_reminder_send_failed channel_id=%s", message.channel.id)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        """Route button clicks. Slash commands arrive via TodoCommandTree."""
        if interaction.type is discord.InteractionType.component:
            await self.handle_interaction(interaction)

    async def handle_interaction(self, interaction: discord.Interaction) -> None:
        """Route one interaction and send back whatever the handler returned."""
        event = event_from_interaction(interaction)
        response = await self.router.route(event)
        if response is None:
            return
        await self._send_response(interaction, response)

    async def _send_response(self, interaction: discord.Interaction, response: Response) -> None:
        embed = build_response_embed(response)
        try:
            if response.replace_original and interaction.message is not None:
                await interaction.response.edit_message(embed=embed, view=None)
            elif response.team_choices:
                view = TeamSelectView(
                    response.team_choices,
                    timeout=self.settings.todobot_session_ttl_seconds,
                )
                await interaction.response.send_message(
                    embed=embed,
                    view=view,
                    ephemeral=response.ephemeral,
                )
            else:
                await interaction.response.send_message(embed=embed, ephemeral=response.ephemeral)
        except discord.HTTPException:
            logger.exception(
                "interaction_response_failed interaction_id=%s",
                interaction.id,
            )


def is_discord_enabled(settings: Settings) -> bool:
    """Check whether Discord integration should be started."""
    return bool(settings.discord_enabled and settings.discord_bot_token)


async def start_discord_bot(settings: Settings, engine: AsyncEngine) -> TodoBot:
    """Create and start the Discord bot in the current event loop.

    Returns the bot instance so the caller can stop it during shutdown.
    The bot runs as a background task; this function returns immediately
    after starting it.
    """
    bot = TodoBot(settings=settings, engine=engine)

    async def _run_bot() -> None:
        try:
            await bot.start(settings.discord_bot_token)
        except asyncio.CancelledError:
            logger.info("discord_bot_cancelled")
        except Exception:  # Last-resort handler: bot.start can raise connection and auth errors
            logger.exception("discord_bot_error")
        finally:
            if not bot.is_closed():
                await bot.close()

    bot.run_task = asyncio.create_task(_run_bot(), name="discord-bot")
    logger.info("discord_bot_started")
    return bot
