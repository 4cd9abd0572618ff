"""Entity: Book."""

from typing import Any

from pydantic import Field

from src.bookshelf.entities._base import Entity


class Book(Entity):
    """Book entity representing a catalog entry.

    ``id`` stays ``None`` until the book is first persisted. ``image_url`` is
    only ever set to the public reference returned by cover storage.
    """

    id: int | None = Field(default=None, description="Book identifier")
    title: str = Field(description="Title")
    description: str = Field(description="Short description")
    content: str = Field(description="Body text")
    user_id: str = Field(description="Identifier of the owning user")
    category_id: int = Field(description="Identifier of the category")
    image_url: str | None = Field(default=None, description="Public cover reference")

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.description == other.description
            and self.content == other.content
            and self.user_id == other.user_id
            and self.category_id == other.category_id
            and self.image_url == other.image_url
        )

    def __hash__(self) -> int:
        return hash((self.id, self.title, self.user_id, self.category_id))
