"""User database table model."""

from sqlmodel import Field

from src.bookshelf.entities._base import TimestampedTable


class UserTable(TimestampedTable, table=True):
    """Database persistence model for users."""

    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=64)
    name: str
    email: str | None = None
