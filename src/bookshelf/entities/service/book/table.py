"""Book database table model."""

from sqlmodel import Field

from src.bookshelf.entities._base import TimestampedTable


class BookTable(TimestampedTable, table=True):
    """Database persistence model for books."""

    __tablename__ = "books"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    description: str
    content: str
    user_id: str = Field(foreign_key="users.id", index=True)
    category_id: int = Field(foreign_key="categories.id", index=True)
    image_url: str | None = None
