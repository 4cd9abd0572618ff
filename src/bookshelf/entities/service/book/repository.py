"""Book repository for data access operations.

Writes only flush; committing or rolling back belongs to the caller that
owns the session.
"""

from collections.abc import Sequence

from sqlalchemy import func
from sqlmodel import Session, col, select

from src.bookshelf.entities._base import fits_sql_integer

from .entity import Book
from .table import BookTable


class BookRepository:
    """Data-access layer for books."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _get_row(self, book_id: int) -> BookTable | None:
        # Ids outside the column range cannot exist
        if not fits_sql_integer(book_id):
            return None
        return self._session.get(BookTable, book_id)

    def get(self, book_id: int) -> Book | None:
        row = self._get_row(book_id)
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def create(self, book: Book) -> Book:
        """Insert a book and flush so the database assigns its id."""
        row = BookTable.model_validate(book.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def update(self, book: Book) -> Book:
        row = self._get_row(book.id)
        if row is None:
            raise ValueError(f"Book with id {book.id} not found")

        for field, value in book.model_dump(exclude={"id", "user_id", "created_at"}).items():
            setattr(row, field, value)

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def delete(self, book_id: int) -> bool:
        row = self._get_row(book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def _page(self, condition, page: int, size: int) -> tuple[Sequence[Book], int]:
        count = select(func.count()).select_from(BookTable)
        if condition is not None:
            count = count.where(condition)
        total = self._session.exec(count).one()

        offset = page * size
        if not fits_sql_integer(offset):
            return [], total

        statement = select(BookTable)
        if condition is not None:
            statement = statement.where(condition)
        statement = statement.order_by(col(BookTable.id).desc()).offset(offset).limit(size)
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows], total

    def find_page(self, page: int, size: int) -> tuple[Sequence[Book], int]:
        """Return one page of books, newest id first, and the total row count."""
        return self._page(None, page, size)

    def find_by_title_containing(
        self, text: str, page: int, size: int
    ) -> tuple[Sequence[Book], int]:
        """Case-insensitive substring search on title, newest id first."""
        condition = func.lower(BookTable.title).contains(text.lower(), autoescape=True)
        return self._page(condition, page, size)
