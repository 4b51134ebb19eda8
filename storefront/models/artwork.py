from pydantic import BaseModel, Field, field_validator
from typing import Optional, Any, List
from datetime import datetime
from enum import Enum


class Category(str, Enum):
    GALLERY = "gallery"
    SHOP = "shop"


class StorageFolder(str, Enum):
    IMAGES = "images"
    SLIDER = "slider"
    VIDEOS = "videos"


# Dossiers qui ne sont pas des œuvres dans la collection partagée
MEDIA_FOLDERS = {StorageFolder.SLIDER.value, StorageFolder.VIDEOS.value}


def normalize_price(value: Any) -> Optional[float]:
    """
    Un prix vide, non numérique ou <= 0 signifie "pas de prix".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    return price if price > 0 else None


class ArtworkCreate(BaseModel):
    title: str
    description: str = ""
    size: str = ""
    material: str = ""
    medium: str = ""
    price: Optional[float] = None
    isForSale: bool = False
    category: Category = Category.GALLERY
    imageUrl: str = ""
    videoUrl: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        return normalize_price(value)

    def to_document(self) -> dict:
        # exclude_none : un prix absent n'est jamais écrit
        return self.model_dump(mode="json", exclude_none=True)


class ArtworkUpdate(BaseModel):
    """Mise à jour partielle. La catégorie n'est pas modifiable."""
    title: Optional[str] = None
    description: Optional[str] = None
    size: Optional[str] = None
    material: Optional[str] = None
    medium: Optional[str] = None
    price: Optional[float] = None
    isForSale: Optional[bool] = None
    imageUrl: Optional[str] = None
    videoUrl: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        return normalize_price(value)

    def to_fields(self) -> dict:
        return self.model_dump(exclude_none=True)


class ArtworkInDB(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    size: str = ""
    material: str = ""
    medium: str = ""
    price: Optional[float] = None
    isForSale: bool = False
    category: Category
    imageUrl: str = ""
    videoUrl: Optional[str] = None
    storageFolder: str = StorageFolder.IMAGES.value
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ArtworkUploadForm(BaseModel):
    """Champs communs à un lot d'uploads (appliqués à chaque fichier)"""
    title: str = ""
    description: str = ""
    size: str = ""
    material: str = ""
    medium: str = ""
    price: Optional[float] = None
    isForSale: bool = False
    category: Category = Category.GALLERY

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        return normalize_price(value)


class UploadResult(BaseModel):
    ids: List[str] = Field(default_factory=list)
    count: int = 0
