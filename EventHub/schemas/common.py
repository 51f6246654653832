from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """Generic API response wrapper."""
    success: bool = Field(..., description="True on success, False on error")
    message: Optional[str] = Field(None, description="Optional message")
    data: Optional[Any] = Field(None, description="Response data (only present on success)")


class PageLink(BaseModel):
    page: int
    limit: int


class PaginatedResponse(ApiResponse):
    """List response with `next`/`prev` links present only when those pages exist."""
    count: int
    pagination: Dict[str, PageLink] = Field(default_factory=dict)
