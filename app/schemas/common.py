# app/schemas/common.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Optional[List[Dict[str, Any]]] = None
    pagination: Optional[Pagination] = None
