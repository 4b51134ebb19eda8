from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from storefront.config import DEFAULT_ARTIST


class FileType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class MediaCreate(BaseModel):
    """Entrée du slider d'accueil ou vidéo autonome"""
    title: str
    artist: str = DEFAULT_ARTIST
    medium: str

    @field_validator("title", "medium")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Please fill all fields")
        return value.strip()

    @field_validator("artist")
    @classmethod
    def _artist(cls, value: str) -> str:
        return value.strip() or DEFAULT_ARTIST


class MediaInDB(BaseModel):
    id: str
    title: str = ""
    artist: str = DEFAULT_ARTIST
    medium: str = ""
    fileType: FileType = FileType.IMAGE
    imageUrl: Optional[str] = None
    videoUrl: Optional[str] = None
    order: int = 0
    storageFolder: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
