"""Pydantic schemas for image uploads."""

from pydantic import BaseModel, Field


class ImageUploadRead(BaseModel):
    message: str
    image_path: str = Field(serialization_alias="imagePath")
    filename: str
