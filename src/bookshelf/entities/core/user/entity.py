"""User domain entity."""

from typing import Any

from pydantic import Field

from src.bookshelf.entities._base import Entity


class User(Entity):
    """A registered user who may own books.

    The identifier is the subject of the user's access tokens; the catalog
    only needs it for existence and ownership checks.
    """

    id: str = Field(description="User identifier (token subject)")
    name: str = Field(description="Display name")
    email: str | None = Field(default=None, description="User's email address")

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
        )

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.email))
