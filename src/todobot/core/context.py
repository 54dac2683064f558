"""Per-event context handed to interaction handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from todobot.errors import IdentityError

if TYPE_CHECKING:
    from todobot.core.router import InboundEvent


@dataclass(frozen=True)
class GuildContext:
    """The guild an interaction belongs to, plus the platform client.

    Built fresh for every inbound event and never shared between events.
    """

    guild_id: int
    user_id: int
    client: object = None

    @classmethod
    def from_event(cls, event: InboundEvent, client: object = None) -> GuildContext:
        """Bind a context to *event*. Raises IdentityError outside a guild."""
        if event.guild_id is None:
            raise IdentityError(f"interaction {event.interaction_id} has no guild")
        return cls(guild_id=event.guild_id, user_id=event.user_id, client=client)
