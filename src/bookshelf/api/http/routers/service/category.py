"""Category API router: the public list books are filed under."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from src.bookshelf.api.http.deps import get_db_session
from src.bookshelf.core.models.category import CategoryListResponse
from src.bookshelf.entities.service.category import CategoryRepository

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
def list_categories(session: Session = Depends(get_db_session)) -> CategoryListResponse:
    """List every category, in id order."""
    repository = CategoryRepository(session)
    return CategoryListResponse.from_entities(repository.list_all())
