"""Two-step add workflow: correlating a team-button click with its command.

``/todo add`` without a team answers with one button per team. The click
arrives later as a separate interaction; this module remembers what the
command asked for so the click can finish the job.

Sessions are keyed by the id of the originating command interaction, which
Discord echoes back on every click as the message's interaction metadata.
Resolution is therefore per message: two people clicking buttons on two
different prompts can never complete each other's todo.

State machine:
    idle -> completed            (team given with the command)
    idle -> awaiting selection   (open)
    awaiting selection -> completed  (consume, within the TTL)
    awaiting selection -> gone       (TTL elapsed; purged lazily)

All methods are synchronous, so each one runs atomically on the event loop.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from todobot.errors import SessionExpired, WrongInitiator

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class PendingAdd:
    """A todo waiting for its team to be picked."""

    interaction_id: int
    guild_id: int
    user_id: int
    content: str
    expires_at: float


class WorkflowCorrelator:
    """Owns every pending add session. Handlers only open and consume by key."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        *,
        enforce_initiator: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.enforce_initiator = enforce_initiator
        self._clock = clock
        self._sessions: dict[int, PendingAdd] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, interaction_id: object) -> bool:
        return interaction_id in self._sessions

    def open(
        self,
        interaction_id: int,
        guild_id: int,
        user_id: int,
        content: str,
    ) -> PendingAdd:
        """Start a session for the command interaction *interaction_id*."""
        self.purge_expired()
        session = PendingAdd(
            interaction_id=interaction_id,
            guild_id=guild_id,
            user_id=user_id,
            content=content,
            expires_at=self._clock() + self.ttl_seconds,
        )
        self._sessions[interaction_id] = session
        logger.debug(
            "add_session_opened interaction_id=%s guild_id=%s user_id=%s",
            interaction_id,
            guild_id,
            user_id,
        )
        return session

    def consume(
        self,
        interaction_id: int | None,
        *,
        guild_id: int,
        user_id: int,
    ) -> PendingAdd:
        """Claim and remove the session for *interaction_id*.

        Raises SessionExpired when there is no live session for this guild,
        and WrongInitiator (leaving the session in place) when another user
        clicks and initiator checks are on.
        """
        session = self._sessions.get(interaction_id) if interaction_id is not None else None
        if session is None:
            raise SessionExpired(f"no add session for interaction {interaction_id}")
        if session.expires_at <= self._clock():
            del self._sessions[interaction_id]
            raise SessionExpired(f"add session for interaction {interaction_id} expired")
        if session.guild_id != guild_id:
            raise SessionExpired(f"add session {interaction_id} belongs to another guild")
        if self.enforce_initiator and session.user_id != user_id:
            raise WrongInitiator(session.user_id)
        del self._sessions[interaction_id]
        return session

    def purge_expired(self) -> int:
        """Drop every session past its TTL. Returns how many were dropped."""
        now = self._clock()
        expired = [key for key, session in self._sessions.items() if session.expires_at <= now]
        for key in expired:
            del self._sessions[key]
        if expired:
            logger.debug("add_sessions_purged count=%d", len(expired))
        return len(expired)
