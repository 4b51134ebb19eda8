"""
Fournisseurs de dépendances FastAPI : une instance par processus,
remplaçables dans les tests via app.dependency_overrides.
"""
from functools import lru_cache
import logging

from storefront import config
from storefront.repositories.admin_repo import AdminRepository, InMemoryAdminRepository
from storefront.repositories.media_repo import MediaRepository, InMemoryMediaRepository
from storefront.services.cart import CartRegistry
from storefront.services.catalog import CatalogService
from storefront.services.storage import create_blob_store

logger = logging.getLogger(__name__)


@lru_cache
def get_catalog() -> CatalogService:
    if config.MONGO_URI:
        from storefront.database import get_media_collection
        repository = MediaRepository(get_media_collection())
    else:
        logger.warning("⚠️ MONGO_URI not set: catalog is kept in memory only")
        repository = InMemoryMediaRepository()
    return CatalogService(repository, create_blob_store())


@lru_cache
def get_admin_repository():
    if config.MONGO_URI:
        from storefront.database import get_admins_collection
        return AdminRepository(get_admins_collection())
    return InMemoryAdminRepository()


@lru_cache
def get_cart_registry() -> CartRegistry:
    return CartRegistry()
