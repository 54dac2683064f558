"""Platform-neutral response payloads returned by interaction handlers.

The Discord layer turns a Response into an embed (and team buttons when
asked); handlers never touch discord.py objects.
"""

from __future__ import annotations

from dataclasses import dataclass

from todobot.models.todo import Team

GREEN = 0x2ECC71
RED = 0xE74C3C
BLUE = 0x3498DB
GREY = 0x95A5A6


@dataclass(frozen=True)
class Response:
    """A single title/description message.

    Attributes:
        team_choices: Teams to offer as buttons under the message.
        replace_original: Edit the message the clicked button sits on
            instead of sending a new one.
    """

    title: str
    description: str = ""
    color: int = BLUE
    ephemeral: bool = False
    team_choices: tuple[Team, ...] = ()
    replace_original: bool = False


NOT_FOUND = Response(
    title="Not found",
    description="That command or button isn't available anymore.",
    color=GREY,
    ephemeral=True,
)


def error_response(message: str) -> Response:
    """A user-fixable problem, e.g. an unknown team or empty text."""
    return Response(title="Couldn't do that", description=message, color=RED, ephemeral=True)


def failure_response() -> Response:
    """Something on our side broke; nothing the user typed was wrong."""
    return Response(
        title="Something went wrong",
        description="The todo list couldn't be reached. Try again in a moment.",
        color=RED,
        ephemeral=True,
    )


def notice_response(message: str) -> Response:
    return Response(title="Hold on", description=message, color=GREY, ephemeral=True)
