"""Response models for the category endpoints."""

from __future__ import annotations

from collections.abc import Sequence

from src.bookshelf.core.models._base import ApiModel
from src.bookshelf.entities.service.category import Category


class CategoryResponse(ApiModel):
    category_id: int
    name: str

    @classmethod
    def from_entity(cls, category: Category) -> CategoryResponse:
        return cls(category_id=category.id, name=category.name)


class CategoryListResponse(ApiModel):
    """Every category, in id order, under ``data``."""

    data: list[CategoryResponse]

    @classmethod
    def from_entities(cls, categories: Sequence[Category]) -> CategoryListResponse:
        return cls(data=[CategoryResponse.from_entity(c) for c in categories])
