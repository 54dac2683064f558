"""Todo domain models: the fixed team set and todo records."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todobot.errors import ValidationError

MAX_TODO_LENGTH = 200


class Team(StrEnum):
    """The closed set of teams a todo can belong to.

    Declaration order is report order. Values double as the custom-ids of
    the team-selection buttons.
    """

    IOS = "iOS"
    ANDROID = "Android"
    WEB = "Web"
    SERVER = "Server"

    @classmethod
    def parse(cls, value: str) -> Team:
        """Return the team named *value*, or raise ValidationError."""
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(team.value for team in cls)
            raise ValidationError(f"Unknown team {value!r}. Pick one of: {valid}.") from None


def clean_content(content: str | None) -> str:
    """Normalize *content* to a single line and check it is usable as a todo.

    Runs of whitespace, newlines included, collapse to one space so a todo
    can never break out of its line in the rendered report.
    """
    text = " ".join((content or "").split())
    if not text:
        raise ValidationError("A todo needs some text.")
    if len(text) > MAX_TODO_LENGTH:
        raise ValidationError(f"Todos are limited to {MAX_TODO_LENGTH} characters.")
    return text


class Todo(BaseModel):
    """One todo line, owned by a guild and filed under a team."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    guild_id: int
    team: Team
    content: str
    author_id: int = 0
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back naive; they were written as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
