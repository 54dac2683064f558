"""Repository pattern for database access.

Wraps a SQLAlchemy async session. Every query is filtered by guild; there
is no method that reads or writes across guilds.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from todobot.db.models import TodoRow


class Repository:
    """Async repository for todo rows."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add_todo(
        self,
        guild_id: int,
        team: str,
        content: str,
        author_id: int = 0,
    ) -> TodoRow:
        row = TodoRow(guild_id=guild_id, team=team, content=content, author_id=author_id)
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_todos(self, guild_id: int) -> list[TodoRow]:
        """Return a guild's todos in insertion order."""
        stmt = select(TodoRow).where(TodoRow.guild_id == guild_id).order_by(TodoRow.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_todos(self, guild_id: int) -> int:
        """Delete every todo for a guild. Returns the number of rows removed."""
        result = await self.session.execute(delete(TodoRow).where(TodoRow.guild_id == guild_id))
        return result.rowcount or 0
