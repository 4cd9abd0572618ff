"""Entity: Category."""

from pydantic import Field

from src.bookshelf.entities._base import Entity


class Category(Entity):
    """Category a book is filed under."""

    id: int | None = Field(default=None, description="Category identifier")
    name: str = Field(description="Name")
