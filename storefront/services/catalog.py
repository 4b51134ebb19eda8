"""
Couche d'accès au catalogue : œuvres, slider d'accueil et vidéos.

Toutes les entrées partagent une seule collection ; le champ `storageFolder`
distingue les œuvres ("images") des médias du slider ("slider") et des vidéos
("videos"). Les fichiers associés vivent dans le stockage objet sous
`<namespace>/<folder>/<timestamp>_<filename>`.
"""

from typing import Dict, List, Optional
from datetime import datetime
import time
import logging

from storefront import config
from storefront.models.artwork import (
    ArtworkCreate,
    ArtworkUpdate,
    ArtworkUploadForm,
    Category,
    MEDIA_FOLDERS,
    StorageFolder,
)
from storefront.models.media import FileType, MediaCreate

logger = logging.getLogger(__name__)


class AssetFile:
    """Fichier reçu d'un formulaire admin"""

    def __init__(self, filename: str, content_type: str, data: bytes):
        self.filename = filename or "upload"
        self.content_type = content_type or "application/octet-stream"
        self.data = data

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def is_video(self) -> bool:
        return self.content_type.startswith("video/")


def _created_at_key(doc: Dict):
    return doc.get("createdAt") or datetime.min


def _is_artwork(doc: Dict) -> bool:
    return doc.get("storageFolder") not in MEDIA_FOLDERS


class CatalogService:

    def __init__(self, repository, blob_store, namespace: str = None):
        self.repository = repository
        self.blob_store = blob_store
        self.namespace = namespace or config.STORAGE_NAMESPACE

    # --- Fichiers -----------------------------------------------------------

    def upload_asset(self, file: AssetFile, folder: str) -> str:
        """
        Envoie le fichier dans le stockage objet et retourne son URL publique.
        Les erreurs remontent : l'écriture dépendante doit être abandonnée.
        """
        key = f"{self.namespace}/{folder}/{int(time.time() * 1000)}_{file.filename}"
        url = self.blob_store.upload(key, file.data, file.content_type)
        logger.info(f"Uploaded asset {key} ({file.size} bytes)")
        return url

    def delete_asset(self, url: str) -> bool:
        """
        Suppression best-effort : un échec est journalisé, jamais propagé.
        """
        if not url:
            return False
        try:
            self.blob_store.delete(url)
            return True
        except Exception as e:
            logger.warning(f"Orphaned asset left in storage: {url} ({e})")
            return False

    # --- Œuvres -------------------------------------------------------------

    def create_artwork(self, fields: ArtworkCreate) -> str:
        now = datetime.utcnow()
        document = fields.to_document()
        document.update({
            "storageFolder": StorageFolder.IMAGES.value,
            "createdAt": now,
            "updatedAt": now,
        })
        artwork_id = self.repository.insert(document)
        logger.info(f"Artwork created: {artwork_id} ({document['category']})")
        return artwork_id

    def list_artworks(self) -> List[Dict]:
        try:
            docs = self.repository.find({})
        except Exception as e:
            logger.error(f"Error loading artworks: {e}")
            return []
        artworks = [doc for doc in docs if _is_artwork(doc)]
        return sorted(artworks, key=_created_at_key, reverse=True)

    def list_artworks_by_category(self, category: Category) -> List[Dict]:
        """
        Filtre par catégorie, écarte les médias slider/vidéos qui partagent
        la collection, puis trie par date de création décroissante en mémoire.
        """
        try:
            docs = self.repository.find({"category": Category(category).value})
        except Exception as e:
            logger.error(f"Error loading {category} artworks: {e}")
            return []
        artworks = [doc for doc in docs if _is_artwork(doc)]
        return sorted(artworks, key=_created_at_key, reverse=True)

    def get_artwork(self, artwork_id: str) -> Optional[Dict]:
        doc = self.repository.get(artwork_id)
        if not doc or not _is_artwork(doc):
            return None
        return doc

    def count_artworks(self) -> int:
        """Tous les documents moins les médias slider / vidéos"""
        media = sum(self.repository.count({"storageFolder": folder}) for folder in MEDIA_FOLDERS)
        return self.repository.count({}) - media

    def update_artwork(self, artwork_id: str, fields: ArtworkUpdate) -> bool:
        """
        Fusionne les champs fournis (dernier écrit gagnant) et rafraîchit updatedAt.
        Retourne False si l'œuvre n'existe pas.
        """
        if self.get_artwork(artwork_id) is None:
            return False
        update_data = fields.to_fields()
        update_data["updatedAt"] = datetime.utcnow()
        return self.repository.update(artwork_id, update_data)

    def edit_artwork(self, artwork_id: str, fields: ArtworkUpdate, file: Optional[AssetFile] = None) -> bool:
        existing = self.get_artwork(artwork_id)
        if existing is None:
            return False

        new_url = replaced_url = None
        if file is not None:
            if file.is_video:
                new_url = fields.videoUrl = self.upload_asset(file, StorageFolder.VIDEOS.value)
                replaced_url = existing.get("videoUrl")
            else:
                new_url = fields.imageUrl = self.upload_asset(file, StorageFolder.IMAGES.value)
                replaced_url = existing.get("imageUrl")

        try:
            updated = self.update_artwork(artwork_id, fields)
        except Exception:
            # Le nouveau fichier n'est référencé par aucun enregistrement
            self.delete_asset(new_url)
            raise
        if not updated:
            self.delete_asset(new_url)
        elif replaced_url:
            self.delete_asset(replaced_url)
        return updated

    def check_upload_batch(self, file_count: int):
        """Limites vérifiées avant tout envoi de fichier"""
        if file_count == 0:
            raise ValueError("Please select files to upload")
        if file_count > config.MAX_FILES_PER_UPLOAD:
            raise ValueError(f"You can upload a maximum of {config.MAX_FILES_PER_UPLOAD} files at once.")
        current = self.count_artworks()
        if current + file_count > config.UPLOAD_LIMIT:
            raise ValueError(
                f"Cannot upload {file_count} files. This would exceed the limit of {config.UPLOAD_LIMIT} artworks."
            )

    def upload_artworks(self, files: List[AssetFile], form: ArtworkUploadForm) -> List[str]:
        """
        Crée une œuvre par fichier. Les champs vides reçoivent des valeurs
        par défaut numérotées.
        """
        self.check_upload_batch(len(files))

        created = []
        for index, file in enumerate(files):
            folder = StorageFolder.VIDEOS.value if file.is_video else StorageFolder.IMAGES.value
            url = self.upload_asset(file, folder)
            fields = ArtworkCreate(
                title=form.title or f"Artwork {index + 1}",
                description=form.description or f"Uploaded artwork {index + 1}",
                size=form.size or "Unknown",
                material=form.material or "Unknown",
                medium=form.medium or "Unknown",
                price=form.price,
                isForSale=form.isForSale,
                category=form.category,
                imageUrl="" if file.is_video else url,
                videoUrl=url if file.is_video else None,
            )
            created.append(self.create_artwork(fields))
        return created

    def delete_artwork(self, artwork: Dict) -> bool:
        """
        Supprime les fichiers associés (best-effort, les deux sont tentés)
        puis l'enregistrement, même si un fichier n'a pas pu être supprimé.
        """
        for url in (artwork.get("imageUrl"), artwork.get("videoUrl")):
            if url:
                self.delete_asset(url)
        deleted = self.repository.delete(artwork["id"])
        if deleted:
            logger.info(f"Artwork deleted: {artwork['id']}")
        return deleted

    # --- Slider et vidéos ---------------------------------------------------

    def _list_media(self, folder: StorageFolder) -> List[Dict]:
        try:
            return self.repository.find({"storageFolder": folder.value})
        except Exception as e:
            logger.error(f"Error fetching {folder.value} media: {e}")
            return []

    def _add_media(self, fields: MediaCreate, file: AssetFile, folder: StorageFolder, order: Optional[int] = None) -> str:
        file_type = FileType.IMAGE if file.is_image else FileType.VIDEO
        url = self.upload_asset(file, folder.value)
        now = datetime.utcnow()
        document = {
            **fields.model_dump(),
            "fileType": file_type.value,
            "storageFolder": folder.value,
            "createdAt": now,
            "updatedAt": now,
        }
        if file_type == FileType.IMAGE:
            document["imageUrl"] = url
        else:
            document["videoUrl"] = url
        if order is not None:
            document["order"] = order
        media_id = self.repository.insert(document)
        logger.info(f"Added {folder.value} media: {media_id}")
        return media_id

    def _delete_media(self, media_id: str, folder: StorageFolder) -> bool:
        doc = self.repository.get(media_id)
        if not doc or doc.get("storageFolder") != folder.value:
            return False
        url = doc.get("imageUrl") or doc.get("videoUrl")
        if url:
            self.delete_asset(url)
        return self.repository.delete(media_id)

    def get_media(self, media_id: str) -> Optional[Dict]:
        return self.repository.get(media_id)

    def list_slider_media(self) -> List[Dict]:
        media = self._list_media(StorageFolder.SLIDER)
        return sorted(media, key=lambda doc: doc.get("order") or 0)

    def add_slider_media(self, fields: MediaCreate, file: AssetFile) -> str:
        """
        Le plafond de 5 entrées est vérifié par comptage avant l'insertion :
        deux sessions admin simultanées peuvent le dépasser.
        """
        if not (file.is_image or file.is_video):
            raise ValueError("Please select an image or video file")
        if file.size > config.SLIDER_MAX_BYTES:
            raise ValueError(f"File size must be less than {config.SLIDER_MAX_BYTES // (1024 * 1024)}MB")
        count = len(self._list_media(StorageFolder.SLIDER))
        if count >= config.SLIDER_LIMIT:
            raise ValueError(f"Maximum {config.SLIDER_LIMIT} slider items allowed")
        return self._add_media(fields, file, StorageFolder.SLIDER, order=count + 1)

    def delete_slider_media(self, media_id: str) -> bool:
        return self._delete_media(media_id, StorageFolder.SLIDER)

    def list_videos(self) -> List[Dict]:
        """Vidéos du dossier "videos" et vidéos du slider, sans doublons"""
        slider_videos = [
            doc for doc in self._list_media(StorageFolder.SLIDER)
            if doc.get("fileType") == FileType.VIDEO.value
        ]
        videos = self._list_media(StorageFolder.VIDEOS) + slider_videos

        unique = {}
        for doc in videos:
            unique.setdefault(doc["id"], doc)
        return sorted(unique.values(), key=_created_at_key, reverse=True)

    def add_video(self, fields: MediaCreate, file: AssetFile) -> str:
        if not file.is_video:
            raise ValueError("Please select a video file")
        if file.size > config.VIDEO_MAX_BYTES:
            raise ValueError(f"Video file size must be less than {config.VIDEO_MAX_BYTES // (1024 * 1024)}MB")
        return self._add_media(fields, file, StorageFolder.VIDEOS)

    def delete_video(self, media_id: str) -> bool:
        return self._delete_media(media_id, StorageFolder.VIDEOS)

    # --- Tableau de bord ----------------------------------------------------

    def dashboard_stats(self) -> Dict:
        artworks = self.list_artworks()
        total = len(artworks)
        return {
            "total_artworks": total,
            "upload_limit": config.UPLOAD_LIMIT,
            "slots_remaining": max(config.UPLOAD_LIMIT - total, 0),
            "limit_reached": total >= config.UPLOAD_LIMIT,
            "gallery_count": sum(1 for a in artworks if a.get("category") == Category.GALLERY.value),
            "shop_count": sum(1 for a in artworks if a.get("category") == Category.SHOP.value),
            "for_sale_count": sum(1 for a in artworks if a.get("isForSale")),
            "slider_count": len(self._list_media(StorageFolder.SLIDER)),
            "slider_limit": config.SLIDER_LIMIT,
            "video_count": len(self.list_videos()),
            "last_updated": datetime.now().isoformat(),
        }
