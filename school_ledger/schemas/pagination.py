from typing import Any, Dict, List, TypeVar, Generic
from pydantic import BaseModel

T = TypeVar('T')

class PaginatedResponse(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    size: int
    has_next: bool
    has_previous: bool
    total_pages: int

    @classmethod
    def from_page(cls, page: Dict[str, Any]) -> "PaginatedResponse[T]":
        """Build from the dict returned by BaseService.get_paginated"""
        return cls.model_validate(page, from_attributes=True)
