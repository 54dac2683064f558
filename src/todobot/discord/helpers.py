"""Discord bot helpers: turning raw interactions into InboundEvents."""

from __future__ import annotations

from typing import Any

import discord

from todobot.core.router import EventKind, InboundEvent

_SUBCOMMAND_TYPES = frozenset(
    {
        discord.AppCommandOptionType.subcommand.value,
        discord.AppCommandOptionType.subcommand_group.value,
    }
)


def _parse_command_options(
    options: list[dict[str, Any]],
) -> tuple[str | None, dict[str, Any]]:
    """Return the first sub-command token and the option values beneath it."""
    for option in options:
        if option.get("type") in _SUBCOMMAND_TYPES:
            _, values = _parse_command_options(option.get("options", []))
            return option["name"], values
    return None, {option["name"]: option.get("value") for option in options}


def event_from_interaction(interaction: discord.Interaction) -> InboundEvent:
    """Reduce a command or component interaction to an InboundEvent."""
    data: dict[str, Any] = dict(interaction.data or {})

    if interaction.type is discord.InteractionType.component:
        metadata = interaction.message.interaction_metadata if interaction.message else None
        return InboundEvent(
            kind=EventKind.COMPONENT,
            interaction_id=interaction.id,
            user_id=interaction.user.id,
            guild_id=interaction.guild_id,
            custom_id=str(data.get("custom_id", "")),
            origin_interaction_id=metadata.id if metadata else None,
        )

    subcommand, options = _parse_command_options(data.get("options", []))
    return InboundEvent(
        kind=EventKind.COMMAND,
        interaction_id=interaction.id,
        user_id=interaction.user.id,
        guild_id=interaction.guild_id,
        name=str(data.get("name", "")),
        subcommand=subcommand,
        options=options,
    )
