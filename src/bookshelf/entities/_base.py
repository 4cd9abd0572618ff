from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

# Largest value a SQL INTEGER (SQLite, PostgreSQL BIGINT) column can hold
SQL_INT_MAX = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(UTC)


def fits_sql_integer(value: int) -> bool:
    """Whether ``value`` can be bound as a key or offset without overflowing."""
    return -SQL_INT_MAX - 1 <= value <= SQL_INT_MAX


class Entity(BaseModel):
    """Base domain entity with creation and update timestamps."""

    model_config = ConfigDict(from_attributes=True)

    created_at: datetime = PydanticField(default_factory=utcnow)
    updated_at: datetime = PydanticField(default_factory=utcnow)


class TimestampedTable(SQLModel, table=False):
    """Base table model carrying creation and update timestamps."""

    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
