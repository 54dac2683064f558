"""Per-guild persistence facade.

The store is the only shared mutable resource in the bot. It owns the
synchronization that makes adds atomic and reset a barrier: writes for one
guild take that guild's lock, so an add either lands fully before a reset or
fully after it. Reads take no lock. Callers never see the locks.

Locks are held weakly: a guild's lock lives only while some write is holding
or waiting on it, so idle guilds cost nothing.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from todobot.db.engine import get_session
from todobot.db.repository import Repository
from todobot.errors import StorageError

logger = logging.getLogger(__name__)


class GuildStore:
    """Hands out guild-scoped repositories bound to a fresh session."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._write_locks: weakref.WeakValueDictionary[int, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _write_lock(self, guild_id: int) -> asyncio.Lock:
        lock = self._write_locks.get(guild_id)
        if lock is None:
            lock = asyncio.Lock()
            self._write_locks[guild_id] = lock
        return lock

    @asynccontextmanager
    async def scoped(
        self,
        guild_id: int,
        *,
        write: bool = False,
    ) -> AsyncGenerator[Repository, None]:
        """Yield a Repository for one unit of work on *guild_id*.

        The session commits when the block exits cleanly. Database failures
        surface as StorageError.
        """
        if write:
            async with self._write_lock(guild_id):
                async with self._session(guild_id) as repo:
                    yield repo
        else:
            async with self._session(guild_id) as repo:
                yield repo

    @asynccontextmanager
    async def _session(self, guild_id: int) -> AsyncGenerator[Repository, None]:
        try:
            async with get_session(self.engine) as session:
                yield Repository(session)
        except SQLAlchemyError as exc:
            logger.exception("guild_store_failed guild_id=%s", guild_id)
            raise StorageError("The todo store is unavailable right now.") from exc
