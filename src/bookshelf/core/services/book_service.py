"""Catalog read and write operations for books.

Writes run inside the caller's session, which is the unit of work: the book
row is flushed first so the database assigns its id, the cover (if one was
requested) is acquired under that id, and only then is the session committed.
Any failure after the flush rolls the session back, so a row never survives
without the cover that was asked for.
"""

from collections.abc import Callable
from datetime import datetime

from loguru import logger
from sqlmodel import Session

from src.bookshelf.core.errors import (
    CatalogValidationError,
    CoverAcquisitionError,
    ForbiddenError,
    NotFoundError,
)
from src.bookshelf.core.models.book import (
    BookCreateRequest,
    BookCreateResponse,
    BookDetailResponse,
    BookListResponse,
    BookUpdateRequest,
    BookUpdateResponse,
    BookWriteRequest,
    DeleteBookResponse,
)
from src.bookshelf.core.services.cover_storage import CoverStorageService
from src.bookshelf.entities._base import utcnow
from src.bookshelf.entities.core.user import User, UserRepository
from src.bookshelf.entities.service.book import Book, BookRepository
from src.bookshelf.entities.service.category import Category, CategoryRepository
from src.bookshelf.runtime.context import get_config


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class BookService:
    def __init__(
        self,
        session: Session,
        cover_storage: CoverStorageService,
        clock: Callable[[], datetime] = utcnow,
        max_page_size: int | None = None,
    ) -> None:
        self._session = session
        self._books = BookRepository(session)
        self._users = UserRepository(session)
        self._categories = CategoryRepository(session)
        self._covers = cover_storage
        self._clock = clock
        self._max_page_size = max_page_size or get_config().pagination.max_size

    # ------------------------------------------------------------------ reads

    def get_books(self, page: int, size: int) -> BookListResponse:
        """Return one page of books, newest first."""
        self._validate_paging(page, size)
        books, total = self._books.find_page(page, size)
        return BookListResponse.from_page(books, total, page, size)

    def search_books_by_title(
        self, title: str | None, page: int, size: int
    ) -> BookListResponse:
        """Case-insensitive substring search on title, newest first."""
        logger.info("Book title search: title={}, page={}, size={}", title, page, size)

        if _is_blank(title):
            logger.warning("Book title search rejected: blank title")
            raise CatalogValidationError("Search title must not be blank")
        self._validate_paging(page, size)

        books, total = self._books.find_by_title_containing(title.strip(), page, size)
        logger.info("Book title search done: title={}, total={}", title, total)
        return BookListResponse.from_page(books, total, page, size)

    def get_book_detail(self, book_id: int) -> BookDetailResponse:
        return BookDetailResponse.from_entity(self._require_book(book_id))

    # ----------------------------------------------------------------- writes

    def create_book(self, user_id: str, req: BookCreateRequest) -> BookCreateResponse:
        logger.info("Create book: userId={}, title={}", user_id, req.title)

        self._validate_fields(req)
        user = self._require_user(user_id)
        category = self._require_category(req.category_id)

        book = Book(
            title=req.title,
            description=req.description,
            content=req.content,
            user_id=user.id,
            category_id=category.id,
        )

        saved: Book | None = None
        cover_written = False
        try:
            saved = self._books.create(book)
            logger.info("Book row flushed: bookId={}", saved.id)

            if not _is_blank(req.image_url):
                saved = self._attach_cover(saved, req.image_url)
                cover_written = True

            self._session.commit()
        except Exception:
            self._session.rollback()
            if cover_written and saved is not None:
                self._discard_orphan_cover(saved.id)
            raise

        logger.info("Book created: bookId={}, imageUrl={}", saved.id, saved.image_url)
        return BookCreateResponse(book_id=saved.id)

    def update_book(
        self, user_id: str, book_id: int, req: BookUpdateRequest
    ) -> BookUpdateResponse:
        logger.info("Update book: userId={}, bookId={}, title={}", user_id, book_id, req.title)

        self._validate_fields(req)
        user = self._require_user(user_id)
        book = self._require_book(book_id)

        if not book.is_owned_by(user.id):
            logger.warning(
                "Update rejected, not the owner: userId={}, ownerId={}", user_id, book.user_id
            )
            raise ForbiddenError("Only the owner can modify this book")

        category = self._require_category(req.category_id)

        book.title = req.title
        book.description = req.description
        book.content = req.content
        book.category_id = category.id
        book.updated_at = self._clock()

        try:
            saved = self._books.update(book)
            logger.info("Book fields flushed: bookId={}, imageUrl={}", saved.id, saved.image_url)

            if not _is_blank(req.image_url):
                saved = self._attach_cover(saved, req.image_url)

            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info("Book updated: bookId={}, imageUrl={}", saved.id, saved.image_url)
        return BookUpdateResponse(book_id=saved.id)

    def delete_book(self, user_id: str, book_id: int) -> DeleteBookResponse:
        logger.info("Delete book: userId={}, bookId={}", user_id, book_id)

        book = self._require_book(book_id)
        if not book.is_owned_by(user_id):
            logger.warning(
                "Delete rejected, not the owner: userId={}, ownerId={}", user_id, book.user_id
            )
            raise ForbiddenError("Only the owner can delete this book")

        try:
            self._books.delete(book_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        self._discard_orphan_cover(book_id)
        return DeleteBookResponse(book_id=book_id, deleted=1)

    # ---------------------------------------------------------------- helpers

    def _attach_cover(self, book: Book, image_url: str) -> Book:
        try:
            book.image_url = self._covers.save_cover_from_url(image_url, book.id)
        except CoverAcquisitionError as exc:
            logger.warning(
                "Invalid image URL for book {}: {} (reason={})", book.id, image_url, exc.reason
            )
            raise CatalogValidationError("Invalid image URL") from exc
        return self._books.update(book)

    def _discard_orphan_cover(self, book_id: int) -> None:
        """Remove the artifact of a book whose row no longer exists.

        Failures are logged and left as orphan artifacts; the database outcome
        already stands.
        """
        try:
            self._covers.discard_cover(book_id)
        except OSError as exc:
            logger.warning("Could not remove cover of book {}: {!r}", book_id, exc)

    def _validate_fields(self, req: BookWriteRequest) -> None:
        if _is_blank(req.title) or _is_blank(req.description) or _is_blank(req.content):
            logger.warning("Book request rejected: blank title/description/content")
            raise CatalogValidationError("Title, description and content are required")

    def _validate_paging(self, page: int, size: int) -> None:
        if page < 0:
            raise CatalogValidationError("Page index must not be negative")
        if size < 1 or size > self._max_page_size:
            raise CatalogValidationError(
                f"Page size must be between 1 and {self._max_page_size}"
            )

    def _require_user(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            logger.warning("User not found: userId={}", user_id)
            raise NotFoundError("user", user_id)
        return user

    def _require_category(self, category_id: int) -> Category:
        category = self._categories.get(category_id)
        if category is None:
            logger.warning("Category not found: categoryId={}", category_id)
            raise NotFoundError("category", category_id)
        return category

    def _require_book(self, book_id: int) -> Book:
        book = self._books.get(book_id)
        if book is None:
            logger.warning("Book not found: bookId={}", book_id)
            raise NotFoundError("book", book_id)
        return book
