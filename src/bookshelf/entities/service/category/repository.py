"""Category repository for data access operations."""

from collections.abc import Sequence

from sqlmodel import Session, select

from src.bookshelf.entities._base import fits_sql_integer

from .entity import Category
from .table import CategoryTable


class CategoryRepository:
    """Data-access layer for categories."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, category_id: int) -> Category | None:
        if not fits_sql_integer(category_id):
            return None
        row = self._session.get(CategoryTable, category_id)
        if row is None:
            return None
        return Category.model_validate(row, from_attributes=True)

    def get_by_name(self, name: str) -> Category | None:
        statement = select(CategoryTable).where(CategoryTable.name == name)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Category.model_validate(row, from_attributes=True)

    def create(self, category: Category) -> Category:
        row = CategoryTable.model_validate(category.model_dump(exclude_none=True))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Category.model_validate(row, from_attributes=True)

    def list_all(self) -> Sequence[Category]:
        rows = self._session.exec(select(CategoryTable).order_by(CategoryTable.id)).all()
        return [Category.model_validate(row, from_attributes=True) for row in rows]
