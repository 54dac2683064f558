"""Slash command registration for the todo bot.

The ``/todo`` group below exists so Discord knows the command shapes; its
callbacks are never invoked. ``TodoCommandTree.interaction_check`` hands
every application-command interaction to the bot's InteractionRouter and
stops discord.py's own dispatch, so commands and button clicks share one
routing path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from todobot.models.todo import MAX_TODO_LENGTH, Team

if TYPE_CHECKING:
    from todobot.discord.bot import TodoBot


class TodoCommandTree(app_commands.CommandTree):
    """Command tree used for registration and sync only."""

    client: TodoBot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.type is discord.InteractionType.application_command:
            await self.client.handle_interaction(interaction)
        return False


def build_todo_group() -> app_commands.Group:
    """Build the ``/todo`` command group (show, reset, add)."""
    group = app_commands.Group(name="todo", description="Shared per-team todo list")

    @group.command(name="show", description="Show every team's todos")
    async def show(interaction: discord.Interaction) -> None:
        """Routed by TodoCommandTree."""

    @group.command(name="reset", description="Delete all todos in this server")
    async def reset(interaction: discord.Interaction) -> None:
        """Routed by TodoCommandTree."""

    @group.command(name="add", description="Add a todo for a team")
    @app_commands.describe(
        content="What needs doing",
        team="Which team it's for (leave empty to pick with buttons)",
    )
    @app_commands.choices(team=[app_commands.Choice(name=t.value, value=t.value) for t in Team])
    async def add(
        interaction: discord.Interaction,
        content: app_commands.Range[str, 1, MAX_TODO_LENGTH],
        team: app_commands.Choice[str] | None = None,
    ) -> None:
        """Routed by TodoCommandTree."""

    return group
