"""Pydantic schemas for Currency."""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from stockroom.domain.schemas.common import reject_null


def _normalize_code(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not value.isalpha():
        raise ValueError("code must be 3 letters")
    return value.upper()


class CurrencyBase(BaseModel):
    code: str = Field(min_length=3, max_length=3)
    name: str = Field(min_length=1, max_length=255)
    symbol: str = Field(min_length=1, max_length=10)

    model_config = {"str_strip_whitespace": True}

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return _normalize_code(value)


class CurrencyCreate(CurrencyBase):
    pass


class CurrencyUpdate(BaseModel):
    code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    symbol: Optional[str] = Field(default=None, min_length=1, max_length=10)

    model_config = {"str_strip_whitespace": True}

    not_null = reject_null("code", "name", "symbol")

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_code(value)


class CurrencyRef(BaseModel):
    id: int
    code: str
    name: str
    symbol: str

    model_config = {"from_attributes": True}


class CurrencyRead(CurrencyRef):
    created_at: Optional[datetime] = None
