"""Todo report rendering.

Pure functions: the same teams and todos always render the same text, so a
report can be re-displayed without drift.
"""

from __future__ import annotations

from collections.abc import Sequence

from todobot.models.todo import Team, Todo

NO_ITEMS_MARKER = "(no items)"


def render_team_block(team: Team, todos: Sequence[Todo]) -> str:
    """Render one team's header and its todo lines."""
    lines = [f"**{team.value}**"]
    if todos:
        lines.extend(f"- {todo.content}" for todo in todos)
    else:
        lines.append(NO_ITEMS_MARKER)
    return "\n".join(lines)


def render_todos(teams: Sequence[Team], todos: Sequence[Todo]) -> str:
    """Group *todos* under each of *teams*, in the order *teams* is given.

    Every team gets a block, even with nothing filed under it. Within a
    block todos keep their relative order from *todos*.
    """
    blocks = [
        render_team_block(team, [todo for todo in todos if todo.team == team]) for team in teams
    ]
    return "\n\n".join(blocks)
