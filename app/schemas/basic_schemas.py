from pydantic import BaseModel
from typing import Any, Optional


class PaginationSchema(BaseModel):
    """
    page based pagination metadata
    """

    total: int
    page: int
    pages: int
    limit: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[Any] = None
