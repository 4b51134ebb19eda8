# storefront/routes/media.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from typing import List
import logging

from storefront.auth import require_admin_auth
from storefront.config import DEFAULT_ARTIST
from storefront.dependencies import get_catalog
from storefront.models.media import MediaCreate, MediaInDB
from storefront.services.catalog import AssetFile, CatalogService

logger = logging.getLogger(__name__)

slider_router = APIRouter()
videos_router = APIRouter()


async def read_media_form(title: str, artist: str, medium: str, file: UploadFile):
    try:
        fields = MediaCreate(title=title, artist=artist, medium=medium)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Please fill all fields and select a file")
    return fields, AssetFile(file.filename, file.content_type, await file.read())


# === Slider d'accueil ===

@slider_router.get("/", response_model=List[MediaInDB])
def list_slider_media(catalog: CatalogService = Depends(get_catalog)):
    return catalog.list_slider_media()


@slider_router.post("/", response_model=MediaInDB)
async def add_slider_media(
    file: UploadFile = File(...),
    title: str = Form(""),
    artist: str = Form(DEFAULT_ARTIST),
    medium: str = Form(""),
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    fields, asset = await read_media_form(title, artist, medium, file)
    try:
        media_id = catalog.add_slider_media(fields, asset)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error adding slider item: {e}")
        raise HTTPException(status_code=500, detail="Failed to add slider item")
    return catalog.get_media(media_id)


@slider_router.delete("/{media_id}")
def delete_slider_media(
    media_id: str,
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    try:
        deleted = catalog.delete_slider_media(media_id)
    except Exception as e:
        logger.error(f"Error deleting slider item {media_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete slider item")
    if not deleted:
        raise HTTPException(status_code=404, detail="Slider item not found")
    return {"message": "Slider item deleted successfully"}


# === Vidéos ===

@videos_router.get("/", response_model=List[MediaInDB])
def list_videos(catalog: CatalogService = Depends(get_catalog)):
    return catalog.list_videos()


@videos_router.post("/", response_model=MediaInDB)
async def add_video(
    file: UploadFile = File(...),
    title: str = Form(""),
    artist: str = Form(DEFAULT_ARTIST),
    medium: str = Form(""),
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    fields, asset = await read_media_form(title, artist, medium, file)
    try:
        video_id = catalog.add_video(fields, asset)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error uploading video: {e}")
        raise HTTPException(status_code=500, detail="Failed to upload video")
    return catalog.get_media(video_id)


@videos_router.delete("/{video_id}")
def delete_video(
    video_id: str,
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    try:
        deleted = catalog.delete_video(video_id)
    except Exception as e:
        logger.error(f"Error deleting video {video_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete video")
    if not deleted:
        raise HTTPException(status_code=404, detail="Video not found")
    return {"message": "Video deleted successfully"}
