"""Request and response models for the book endpoints."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime

from src.bookshelf.core.models._base import ApiModel
from src.bookshelf.entities.service.book import Book


class BookWriteRequest(ApiModel):
    """Fields accepted when creating or replacing a book.

    The text fields are optional at the schema level so that blank and
    missing values are rejected the same way by the service.
    """

    title: str | None = None
    description: str | None = None
    content: str | None = None
    category_id: int
    image_url: str | None = None


class BookCreateRequest(BookWriteRequest):
    pass


class BookUpdateRequest(BookWriteRequest):
    pass


class BookCreateResponse(ApiModel):
    book_id: int


class BookUpdateResponse(ApiModel):
    book_id: int


class DeleteBookResponse(ApiModel):
    book_id: int
    deleted: int = 1


class BookSummary(ApiModel):
    """A book as it appears in list and search results."""

    book_id: int
    title: str
    description: str
    image_url: str | None
    user_id: str
    category_id: int
    created_at: datetime

    @classmethod
    def from_entity(cls, book: Book) -> BookSummary:
        return cls(
            book_id=book.id,
            title=book.title,
            description=book.description,
            image_url=book.image_url,
            user_id=book.user_id,
            category_id=book.category_id,
            created_at=book.created_at,
        )


class BookDetailResponse(BookSummary):
    content: str
    updated_at: datetime

    @classmethod
    def from_entity(cls, book: Book) -> BookDetailResponse:
        return cls(
            book_id=book.id,
            title=book.title,
            description=book.description,
            content=book.content,
            image_url=book.image_url,
            user_id=book.user_id,
            category_id=book.category_id,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )


class BookListResponse(ApiModel):
    """One page of books plus the paging totals."""

    page: int
    size: int
    total_pages: int
    total_elements: int
    books: list[BookSummary]

    @classmethod
    def from_page(
        cls, books: Sequence[Book], total: int, page: int, size: int
    ) -> BookListResponse:
        return cls(
            page=page,
            size=size,
            total_pages=math.ceil(total / size) if size else 0,
            total_elements=total,
            books=[BookSummary.from_entity(book) for book in books],
        )
