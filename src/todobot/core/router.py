"""Interaction routing: inbound event -> exactly one handler -> Response.

Routes live in two immutable tables built at import time, one for slash
commands and one for component custom-ids. The key spaces are disjoint, so
an event can only ever resolve to a single handler; anything unmatched goes
to the not-found handler.

The router is also the handler boundary. Expected failures become
user-facing responses, unexpected ones are logged and swallowed so one bad
interaction can't take the gateway connection down with it.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from todobot.core.context import GuildContext
from todobot.core.responses import (
    NOT_FOUND,
    Response,
    error_response,
    failure_response,
    notice_response,
)
from todobot.errors import (
    IdentityError,
    RoutingMiss,
    StorageError,
    ValidationError,
    WrongInitiator,
)
from todobot.models.todo import Team

if TYPE_CHECKING:
    from todobot.core.handlers import TodoHandlers

logger = logging.getLogger(__name__)


class EventKind(StrEnum):
    COMMAND = "command"
    COMPONENT = "component"


class HandlerId(StrEnum):
    """Every handler the router can dispatch to."""

    SHOW = "show"
    RESET = "reset"
    ADD = "add"
    SELECT_TEAM = "select_team"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class InboundEvent:
    """A platform interaction, reduced to what routing and handlers need.

    Attributes:
        name: Top-level command name (commands only).
        subcommand: First sub-command token, if the command has one.
        options: Option values of the innermost command level.
        custom_id: Component custom-id (components only).
        origin_interaction_id: For components, the id of the command
            interaction whose response message holds the component.
    """

    kind: EventKind
    interaction_id: int
    user_id: int
    guild_id: int | None = None
    name: str = ""
    subcommand: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)
    custom_id: str = ""
    origin_interaction_id: int | None = None


CommandRoute = HandlerId | Mapping[str, HandlerId]

COMMAND_ROUTES: Mapping[str, CommandRoute] = MappingProxyType(
    {
        "todo": MappingProxyType(
            {
                "show": HandlerId.SHOW,
                "reset": HandlerId.RESET,
                "add": HandlerId.ADD,
            }
        ),
    }
)

COMPONENT_ROUTES: Mapping[str, HandlerId] = MappingProxyType(
    {team.value: HandlerId.SELECT_TEAM for team in Team}
)

Handler = Callable[[GuildContext, InboundEvent], Awaitable[Response | None]]


class InteractionRouter:
    """Classifies inbound events and dispatches them to TodoHandlers."""

    def __init__(self, handlers: TodoHandlers, client: object = None) -> None:
        self.client = client
        self._handlers: Mapping[HandlerId, Handler] = MappingProxyType(
            {
                HandlerId.SHOW: handlers.show,
                HandlerId.RESET: handlers.reset,
                HandlerId.ADD: handlers.add,
                HandlerId.SELECT_TEAM: handlers.select_team,
                HandlerId.NOT_FOUND: handlers.not_found,
            }
        )

    def resolve(self, event: InboundEvent) -> HandlerId:
        """Return the handler for *event*. Raises RoutingMiss when nothing matches."""
        if event.kind is EventKind.COMPONENT:
            handler_id = COMPONENT_ROUTES.get(event.custom_id)
            if handler_id is None:
                raise RoutingMiss(f"component {event.custom_id!r}")
            return handler_id

        route = COMMAND_ROUTES.get(event.name)
        if route is None:
            raise RoutingMiss(f"command {event.name!r}")
        if isinstance(route, HandlerId):
            return route
        handler_id = route.get(event.subcommand or "")
        if handler_id is None:
            raise RoutingMiss(f"command {event.name!r} sub-command {event.subcommand!r}")
        return handler_id

    async def route(self, event: InboundEvent) -> Response | None:
        """Handle *event* and return what to send back, or None to stay silent."""
        try:
            handler_id = self.resolve(event)
        except RoutingMiss as miss:
            logger.info("interaction_route_miss %s", miss)
            handler_id = HandlerId.NOT_FOUND

        try:
            ctx = GuildContext.from_event(event, self.client)
        except IdentityError:
            logger.info(
                "interaction_without_guild interaction_id=%s handler=%s",
                event.interaction_id,
                handler_id,
            )
            return None

        return await self._invoke(handler_id, ctx, event)

    async def _invoke(
        self,
        handler_id: HandlerId,
        ctx: GuildContext,
        event: InboundEvent,
    ) -> Response | None:
        handler = self._handlers[handler_id]
        try:
            return await handler(ctx, event)
        except ValidationError as exc:
            logger.info("interaction_rejected handler=%s reason=%s", handler_id, exc)
            return error_response(str(exc))
        except StorageError:
            logger.warning(
                "interaction_storage_failed handler=%s guild_id=%s", handler_id, ctx.guild_id
            )
            return failure_response()
        except RoutingMiss as miss:
            # SessionExpired lands here: a stale click is just a miss.
            logger.info("interaction_route_miss %s", miss)
            return NOT_FOUND
        except WrongInitiator as exc:
            return notice_response(str(exc))
        except Exception:  # Last-resort handler: one failed interaction must not escape
            logger.exception(
                "interaction_handler_failed handler=%s interaction_id=%s",
                handler_id,
                event.interaction_id,
            )
            return None
