"""Guild-scoped todo services: teams, todos, and reset.

Each call is one unit of work against the GuildStore. Errors propagate to
the caller untouched (StorageError, ValidationError); nothing here retries.
"""

from __future__ import annotations

import logging

from todobot.core.store import GuildStore
from todobot.models.todo import Team, Todo, clean_content

logger = logging.getLogger(__name__)


class TeamRepository:
    """Teams are fixed, not guild data. Exposed per guild for symmetry with todos."""

    async def get_teams(self, guild_id: int) -> list[Team]:  # noqa: ARG002
        return list(Team)


class TodoRepository:
    def __init__(self, store: GuildStore) -> None:
        self.store = store

    async def get_todos(self, guild_id: int) -> list[Todo]:
        """Return all todos for the guild in insertion order (empty if none)."""
        async with self.store.scoped(guild_id) as repo:
            rows = await repo.get_todos(guild_id)
            return [Todo.model_validate(row) for row in rows]

    async def add_todo(
        self,
        guild_id: int,
        team: Team | str,
        content: str,
        author_id: int = 0,
    ) -> Todo:
        """Validate and persist a todo, returning it with its new id and timestamp."""
        team = team if isinstance(team, Team) else Team.parse(team)
        text = clean_content(content)
        async with self.store.scoped(guild_id, write=True) as repo:
            row = await repo.add_todo(guild_id, team.value, text, author_id)
            todo = Todo.model_validate(row)
        logger.info("todo_added guild_id=%s team=%s todo_id=%s", guild_id, team.value, todo.id)
        return todo


class ResetService:
    def __init__(self, store: GuildStore) -> None:
        self.store = store

    async def reset(self, guild_id: int) -> int:
        """Delete every todo in the guild. Safe to repeat; returns rows removed."""
        async with self.store.scoped(guild_id, write=True) as repo:
            removed = await repo.delete_todos(guild_id)
        logger.info("todos_reset guild_id=%s removed=%d", guild_id, removed)
        return removed
