"""
Common response models and utilities.

Generic response wrappers.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic page-numbered response wrapper."""

    items: list[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
