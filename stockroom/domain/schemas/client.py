"""Pydantic schemas for Client domain."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from stockroom.domain.schemas.common import reject_null


class ClientBase(BaseModel):
    full_name: str = Field(min_length=1, max_length=255)
    number: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    number: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None

    model_config = {"str_strip_whitespace": True}

    not_null = reject_null("full_name")


class ClientRef(BaseModel):
    id: int
    full_name: str
    number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    model_config = {"from_attributes": True}


class ClientRead(ClientRef):
    created_at: Optional[datetime] = None
