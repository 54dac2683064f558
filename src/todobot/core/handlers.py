"""Interaction handlers for the todo commands and team buttons.

Each handler takes the GuildContext and the InboundEvent and returns a
Response. Errors are left to the router, which converts them at the
handler boundary.
"""

from __future__ import annotations

import dataclasses
import logging

from todobot.core.context import GuildContext
from todobot.core.render import render_todos
from todobot.core.responses import GREEN, NOT_FOUND, Response
from todobot.core.router import InboundEvent
from todobot.core.store import GuildStore
from todobot.core.todos import ResetService, TeamRepository, TodoRepository
from todobot.core.workflow import WorkflowCorrelator
from todobot.models.todo import Team, clean_content

logger = logging.getLogger(__name__)


class TodoHandlers:
    def __init__(
        self,
        teams: TeamRepository,
        todos: TodoRepository,
        resets: ResetService,
        correlator: WorkflowCorrelator,
    ) -> None:
        self.teams = teams
        self.todos = todos
        self.resets = resets
        self.correlator = correlator

    @classmethod
    def from_store(cls, store: GuildStore, correlator: WorkflowCorrelator) -> TodoHandlers:
        return cls(
            teams=TeamRepository(),
            todos=TodoRepository(store),
            resets=ResetService(store),
            correlator=correlator,
        )

    async def show(self, ctx: GuildContext, event: InboundEvent) -> Response:  # noqa: ARG002
        """/todo show: every team's todos, grouped in team order."""
        teams = await self.teams.get_teams(ctx.guild_id)
        todos = await self.todos.get_todos(ctx.guild_id)
        return Response(title="Todos", description=render_todos(teams, todos), color=GREEN)

    async def reset(self, ctx: GuildContext, event: InboundEvent) -> Response:  # noqa: ARG002
        """/todo reset: clear the guild's list."""
        removed = await self.resets.reset(ctx.guild_id)
        noun = "todo" if removed == 1 else "todos"
        return Response(
            title="Todos reset",
            description=f"Cleared {removed} {noun}. Fresh start!",
            color=GREEN,
        )

    async def add(self, ctx: GuildContext, event: InboundEvent) -> Response:
        """/todo add: file a todo now, or ask which team it belongs to."""
        content = clean_content(event.options.get("content"))
        team_value = event.options.get("team")
        if team_value:
            team = Team.parse(team_value)
            todo = await self.todos.add_todo(ctx.guild_id, team, content, ctx.user_id)
            return _added_response(todo.team, todo.content)

        self.correlator.open(
            interaction_id=event.interaction_id,
            guild_id=ctx.guild_id,
            user_id=ctx.user_id,
            content=content,
        )
        return Response(
            title="Which team is this for?",
            description=f"> {content}\n\nPick a team below.",
            team_choices=tuple(await self.teams.get_teams(ctx.guild_id)),
        )

    async def select_team(self, ctx: GuildContext, event: InboundEvent) -> Response:
        """Team button click: finish the add started by the originating command."""
        team = Team.parse(event.custom_id)
        # Claim before writing so a double click can't file the todo twice.
        session = self.correlator.consume(
            event.origin_interaction_id,
            guild_id=ctx.guild_id,
            user_id=ctx.user_id,
        )
        todo = await self.todos.add_todo(ctx.guild_id, team, session.content, session.user_id)
        return dataclasses.replace(_added_response(todo.team, todo.content), replace_original=True)

    async def not_found(self, ctx: GuildContext, event: InboundEvent) -> Response:
        logger.debug(
            "not_found guild_id=%s kind=%s name=%s custom_id=%s",
            ctx.guild_id,
            event.kind,
            event.name,
            event.custom_id,
        )
        return NOT_FOUND


def _added_response(team: Team, content: str) -> Response:
    return Response(title="Todo added", description=f"**{team.value}**\n- {content}", color=GREEN)
