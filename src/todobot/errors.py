"""Error taxonomy for interaction handling.

The router converts each of these into a user-facing response (or silence)
at the handler boundary. See ``todobot.core.router``.
"""

from __future__ import annotations


class TodoBotError(Exception):
    """Base class for all todo bot errors."""


class IdentityError(TodoBotError):
    """Raised when an inbound event carries no guild to act on."""


class ValidationError(TodoBotError):
    """Raised when a todo references an unknown team or has unusable content.

    The message is shown to the user as-is.
    """


class StorageError(TodoBotError):
    """Raised when the persistence layer fails. Never retried inside the core."""


class RoutingMiss(TodoBotError):
    """Raised when no handler is registered for a command or component id."""


class SessionExpired(RoutingMiss):
    """Raised when a follow-up click has no live session to complete."""


class WrongInitiator(TodoBotError):
    """Raised when someone other than the initiating user clicks a pending add."""

    def __init__(self, initiator_id: int) -> None:
        super().__init__(f"Only <@{initiator_id}> can pick the team for this todo.")
        self.initiator_id = initiator_id
