"""Book API router: listing, search, detail, cover download and owner-only writes."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from src.bookshelf.api.http.deps import (
    get_book_service,
    get_cover_storage_service,
    get_current_user_id,
)
from src.bookshelf.core.models.book import (
    BookCreateRequest,
    BookCreateResponse,
    BookDetailResponse,
    BookListResponse,
    BookUpdateRequest,
    BookUpdateResponse,
    DeleteBookResponse,
)
from src.bookshelf.core.services import BookService, CoverStorageService
from src.bookshelf.runtime.context import get_config

router = APIRouter()

_default_size = get_config().pagination.default_size


@router.get("", response_model=BookListResponse)
def list_books(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=_default_size, ge=1),
    service: BookService = Depends(get_book_service),
) -> BookListResponse:
    """List books, newest first."""
    return service.get_books(page, size)


@router.get("/search", response_model=BookListResponse)
def search_books(
    title: str | None = Query(default=None),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=_default_size, ge=1),
    service: BookService = Depends(get_book_service),
) -> BookListResponse:
    """Search books by a case-insensitive title fragment."""
    return service.search_books_by_title(title, page, size)


@router.get("/cover/{book_id}", response_class=FileResponse)
def get_cover(
    book_id: int,
    covers: CoverStorageService = Depends(get_cover_storage_service),
) -> FileResponse:
    """Serve the stored cover image of a book."""
    path = covers.open_cover(book_id)
    if path is None:
        raise HTTPException(status_code=404, detail="Cover not found")
    return FileResponse(path, media_type="image/png")


@router.get("/{book_id}", response_model=BookDetailResponse)
def get_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> BookDetailResponse:
    """Get a book by ID."""
    return service.get_book_detail(book_id)


@router.post("", response_model=BookCreateResponse, status_code=status.HTTP_201_CREATED)
def create_book(
    req: BookCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: BookService = Depends(get_book_service),
) -> BookCreateResponse:
    """Create a book owned by the caller, optionally fetching its cover."""
    return service.create_book(user_id, req)


@router.put("/{book_id}", response_model=BookUpdateResponse)
def update_book(
    book_id: int,
    req: BookUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: BookService = Depends(get_book_service),
) -> BookUpdateResponse:
    """Replace a book's fields. Only the owner may update."""
    return service.update_book(user_id, book_id, req)


@router.delete("/{book_id}", response_model=DeleteBookResponse)
def delete_book(
    book_id: int,
    user_id: str = Depends(get_current_user_id),
    service: BookService = Depends(get_book_service),
) -> DeleteBookResponse:
    """Delete a book. Only the owner may delete."""
    return service.delete_book(user_id, book_id)
