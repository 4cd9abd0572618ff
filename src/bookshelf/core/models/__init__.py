from .book import (
    BookCreateRequest,
    BookCreateResponse,
    BookDetailResponse,
    BookListResponse,
    BookSummary,
    BookUpdateRequest,
    BookUpdateResponse,
    DeleteBookResponse,
)
from .category import CategoryListResponse, CategoryResponse
from .session import TokenClaims

__all__ = [
    "BookCreateRequest",
    "BookCreateResponse",
    "BookDetailResponse",
    "BookListResponse",
    "BookSummary",
    "BookUpdateRequest",
    "BookUpdateResponse",
    "CategoryListResponse",
    "CategoryResponse",
    "DeleteBookResponse",
    "TokenClaims",
]
