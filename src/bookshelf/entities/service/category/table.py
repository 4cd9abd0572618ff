"""Category database table model."""

from sqlmodel import Field

from src.bookshelf.entities._base import TimestampedTable


class CategoryTable(TimestampedTable, table=True):
    """Database persistence model for categories."""

    __tablename__ = "categories"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
