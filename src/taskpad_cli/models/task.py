"""Task data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

TaskId = int | str


class Task(BaseModel):
    """A single to-do item.

    The remote API names the text field ``task``; it is exposed here as
    ``text``. ``id`` stays ``None`` until the server has assigned one.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: TaskId | None = None
    text: str = Field(alias="task")
    completed: bool = False

    def matches(self, text: str) -> bool:
        """Return True if *text* duplicates this task's text (case-insensitive)."""
        return self.text.casefold() == text.casefold()

    def to_wire(self) -> dict:
        """Serialize using the remote API's field names."""
        return self.model_dump(by_alias=True)
