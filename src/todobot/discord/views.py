"""Discord UI views: team-selection buttons for the two-step add."""

from __future__ import annotations

from collections.abc import Iterable

import discord

from todobot.models.todo import Team


class TeamSelectView(discord.ui.View):
    """One secondary button per team, custom-id equal to the team name.

    The buttons carry no callbacks of their own: clicks are picked up by
    ``TodoBot.on_interaction`` and routed by custom-id like any other
    component interaction.
    """

    def __init__(self, teams: Iterable[Team], *, timeout: float | None = 300) -> None:
        super().__init__(timeout=timeout)
        for team in teams:
            self.add_item(
                discord.ui.Button(
                    label=team.value,
                    custom_id=team.value,
                    style=discord.ButtonStyle.secondary,
                )
            )
