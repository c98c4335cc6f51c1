"""
Uniform response envelope.

Every JSON response is either ``Success`` (``data``/``message`` and, for
lists, ``pagination``) or ``Failure`` (``error``), tagged by ``success``.
"""
import math
from typing import Any, Literal, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(serialization_alias="totalPages")
    model_config = ConfigDict(populate_by_name=True)


class Success(BaseModel):
    success: Literal[True] = True
    data: Any = None
    message: Optional[str] = None
    pagination: Optional[Pagination] = None


class Failure(BaseModel):
    success: Literal[False] = False
    error: str


def _render(body: BaseModel, status_code: int) -> JSONResponse:
    content = body.model_dump(mode="json", by_alias=True)
    # Optional top-level members are omitted rather than sent as null
    for key in ("data", "message", "pagination"):
        if key in content and content[key] is None:
            content.pop(key)
    return JSONResponse(content=content, status_code=status_code)


def ok(data: Any = None, message: Optional[str] = None, status_code: int = 200) -> JSONResponse:
    return _render(Success(data=data, message=message), status_code)


def paginated(data: list, *, page: int, limit: int, total: int) -> JSONResponse:
    pagination = Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit) if limit else 0,
    )
    return _render(Success(data=data, pagination=pagination), 200)


def failure(error: str, status_code: int) -> JSONResponse:
    return _render(Failure(error=error), status_code)
