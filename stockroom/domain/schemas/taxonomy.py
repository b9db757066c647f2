"""Pydantic schemas for Category and Brand (name + description tags)."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from stockroom.domain.schemas.common import reject_null


class TagBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class TagUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None

    model_config = {"str_strip_whitespace": True}

    not_null = reject_null("name")


class TagRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TagRef(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class CategoryCreate(TagBase):
    pass


class CategoryUpdate(TagUpdate):
    pass


class CategoryRead(TagRead):
    pass


class BrandCreate(TagBase):
    pass


class BrandUpdate(TagUpdate):
    pass


class BrandRead(TagRead):
    pass
