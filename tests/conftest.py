import os

import pytest
from fastapi.testclient import TestClient

# Tests isolés : aucune connexion MongoDB / S3
os.environ.pop("MONGO_URI", None)
os.environ.setdefault("SECRET_KEY", "test-secret")

from storefront.dependencies import get_admin_repository, get_cart_registry, get_catalog
from storefront.main import app
from storefront.models.artwork import ArtworkCreate
from storefront.repositories.admin_repo import InMemoryAdminRepository
from storefront.repositories.media_repo import InMemoryMediaRepository
from storefront.services.cart import CartRegistry
from storefront.services.catalog import AssetFile, CatalogService
from storefront.services.storage import InMemoryBlobStore

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "secret123"


@pytest.fixture
def repository():
    return InMemoryMediaRepository()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def catalog(repository, blob_store):
    return CatalogService(repository, blob_store, namespace="Fashionistic_Arts")


@pytest.fixture
def cart_registry():
    return CartRegistry()


@pytest.fixture
def client(catalog, cart_registry):
    admin_repository = InMemoryAdminRepository()
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_admin_repository] = lambda: admin_repository
    app.dependency_overrides[get_cart_registry] = lambda: cart_registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    """Client avec un compte admin créé et connecté (cookie auth_token)"""
    r = client.post("/api/admin/signup", json={
        "email": ADMIN_EMAIL,
        "password": ADMIN_PASSWORD,
        "confirmPassword": ADMIN_PASSWORD,
    })
    assert r.status_code == 200
    r = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return client


def image_file(name="painting.jpg", data=b"jpeg-bytes"):
    return AssetFile(name, "image/jpeg", data)


def video_file(name="clip.mp4", data=b"mp4-bytes"):
    return AssetFile(name, "video/mp4", data)


def make_artwork(catalog, **overrides):
    fields = {
        "title": "Blue Hour",
        "description": "Oil on canvas",
        "size": "50x70 cm",
        "material": "Canvas",
        "medium": "Oil",
        "category": "gallery",
        "imageUrl": "memory://Fashionistic_Arts/images/1_blue.jpg",
    }
    fields.update(overrides)
    return catalog.create_artwork(ArtworkCreate(**fields))
