"""
Stockage objet des fichiers (images, vidéos) sur un bucket S3 compatible (R2, S3, MinIO).
"""

from typing import Dict, Optional
from urllib.parse import quote, unquote, urlparse
import logging

import boto3
from botocore.config import Config

from storefront import config

logger = logging.getLogger(__name__)


class S3BlobStore:
    """Bucket S3 : upload via put_object, URL publique durable"""

    def __init__(self, client, bucket: str, public_url: Optional[str] = None):
        self.client = client
        self.bucket = bucket
        self.public_url = public_url.rstrip("/") if public_url else None

    @classmethod
    def from_config(cls) -> "S3BlobStore":
        client = boto3.client(
            "s3",
            endpoint_url=config.S3_ENDPOINT,
            aws_access_key_id=config.S3_ACCESS_KEY,
            aws_secret_access_key=config.S3_SECRET_KEY,
            region_name=config.S3_REGION,
            config=Config(signature_version="s3v4"),
        )
        public_url = config.S3_PUBLIC_URL or f"{config.S3_ENDPOINT.rstrip('/')}/{config.S3_BUCKET}"
        return cls(client, config.S3_BUCKET, public_url)

    def url_for(self, key: str) -> str:
        return f"{self.public_url}/{quote(key)}"

    def key_from_url(self, url: str) -> Optional[str]:
        """Retrouve la clé de l'objet à partir de son URL publique"""
        if not url:
            return None
        if self.public_url and url.startswith(self.public_url + "/"):
            return unquote(url[len(self.public_url) + 1:])
        if f"{self.bucket}/" in url:
            return unquote(url.split(f"{self.bucket}/", 1)[-1])
        path = urlparse(url).path.lstrip("/")
        return unquote(path) or None

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        return self.url_for(key)

    def delete(self, url: str):
        key = self.key_from_url(url)
        if not key:
            raise ValueError(f"Could not extract storage key from URL: {url}")
        self.client.delete_object(Bucket=self.bucket, Key=key)


class InMemoryBlobStore:
    """Même interface que S3BlobStore, fichiers gardés en mémoire"""

    PREFIX = "memory://"

    def __init__(self):
        self.objects: Dict[str, bytes] = {}

    def key_from_url(self, url: str) -> Optional[str]:
        if not url or not url.startswith(self.PREFIX):
            return None
        return url[len(self.PREFIX):]

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = data
        return f"{self.PREFIX}{key}"

    def delete(self, url: str):
        key = self.key_from_url(url)
        if key not in self.objects:
            raise KeyError(f"No object stored at {url}")
        del self.objects[key]


def create_blob_store():
    """Bucket S3 si configuré, sinon stockage en mémoire (non persistant)"""
    if config.S3_ENDPOINT and config.S3_BUCKET:
        return S3BlobStore.from_config()
    logger.warning("⚠️ S3_ENDPOINT / S3_BUCKET not set: uploads are kept in memory only")
    return InMemoryBlobStore()
