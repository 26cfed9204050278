from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginationMeta(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class PaginatedResponse(BaseModel, Generic[T]):
    """A window of a list that has already been filtered for the caller"""
    items: list[T]
    pagination: PaginationMeta


def paginate(rows: Sequence[T], limit: int, offset: int) -> PaginatedResponse[T]:
    window = list(rows[offset:offset + limit])
    return PaginatedResponse(
        items=window,
        pagination=PaginationMeta(
            total=len(rows),
            limit=limit,
            offset=offset,
            has_more=offset + len(window) < len(rows),
        ),
    )
