# storefront/routes/artworks.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from typing import List, Optional
import logging

from storefront.auth import require_admin_auth
from storefront.dependencies import get_catalog
from storefront.models.artwork import (
    ArtworkInDB,
    ArtworkUpdate,
    ArtworkUploadForm,
    Category,
    UploadResult,
)
from storefront.services.catalog import AssetFile, CatalogService

logger = logging.getLogger(__name__)
router = APIRouter()

SAVE_ERROR = "Error saving artwork. Please try again."
DELETE_ERROR = "Error deleting artwork. Please try again."


async def to_asset_file(upload: UploadFile) -> AssetFile:
    return AssetFile(upload.filename, upload.content_type, await upload.read())


@router.get("/", response_model=List[ArtworkInDB])
def list_artworks(
    category: Optional[Category] = Query(None),
    catalog: CatalogService = Depends(get_catalog),
):
    """
    Œuvres d'une catégorie (galerie ou boutique), ou toutes les œuvres.
    Une erreur de lecture renvoie une liste vide.
    """
    if category is None:
        return catalog.list_artworks()
    return catalog.list_artworks_by_category(category)


@router.get("/{artwork_id}", response_model=ArtworkInDB)
def get_artwork(artwork_id: str, catalog: CatalogService = Depends(get_catalog)):
    artwork = catalog.get_artwork(artwork_id)
    if not artwork:
        raise HTTPException(status_code=404, detail="Artwork not found")
    return artwork


@router.post("/upload", response_model=UploadResult)
async def upload_artworks(
    files: List[UploadFile] = File(...),
    title: str = Form(""),
    description: str = Form(""),
    size: str = Form(""),
    material: str = Form(""),
    medium: str = Form(""),
    price: Optional[str] = Form(None),
    isForSale: bool = Form(False),
    category: Category = Form(Category.GALLERY),
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    """
    Crée une œuvre par fichier envoyé (15 fichiers maximum par lot).
    """
    form = ArtworkUploadForm(
        title=title,
        description=description,
        size=size,
        material=material,
        medium=medium,
        price=price,
        isForSale=isForSale,
        category=category,
    )
    # Limites vérifiées avant de lire les fichiers
    try:
        catalog.check_upload_batch(len(files))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    assets = [await to_asset_file(f) for f in files]
    try:
        ids = catalog.upload_artworks(assets, form)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error saving artwork: {e}")
        raise HTTPException(status_code=500, detail=SAVE_ERROR)

    return {"ids": ids, "count": len(ids)}


@router.put("/{artwork_id}", response_model=ArtworkInDB)
async def update_artwork(
    artwork_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    material: Optional[str] = Form(None),
    medium: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    isForSale: Optional[bool] = Form(None),
    file: Optional[UploadFile] = File(None),
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    """
    Modifie n'importe quel sous-ensemble de champs, et optionnellement le fichier.
    La catégorie est fixée à la création.
    """
    if not catalog.get_artwork(artwork_id):
        raise HTTPException(status_code=404, detail="Artwork not found")

    fields = ArtworkUpdate(
        title=title,
        description=description,
        size=size,
        material=material,
        medium=medium,
        price=price,
        isForSale=isForSale,
    )
    asset = await to_asset_file(file) if file is not None and file.filename else None

    try:
        updated = catalog.edit_artwork(artwork_id, fields, asset)
    except Exception as e:
        logger.error(f"Error updating artwork {artwork_id}: {e}")
        raise HTTPException(status_code=500, detail=SAVE_ERROR)

    if not updated:
        raise HTTPException(status_code=404, detail="Artwork not found")
    return catalog.get_artwork(artwork_id)


@router.delete("/{artwork_id}")
def delete_artwork(
    artwork_id: str,
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    """
    Supprime l'œuvre et, au mieux, ses fichiers dans le stockage.
    """
    artwork = catalog.get_artwork(artwork_id)
    if not artwork:
        raise HTTPException(status_code=404, detail="Artwork not found")

    try:
        deleted = catalog.delete_artwork(artwork)
    except Exception as e:
        logger.error(f"Error deleting artwork {artwork_id}: {e}")
        raise HTTPException(status_code=500, detail=DELETE_ERROR)

    if not deleted:
        raise HTTPException(status_code=404, detail="Artwork not found")
    return {"message": "Artwork deleted successfully"}
