from pymongo import MongoClient
import logging

from storefront import config

logger = logging.getLogger(__name__)

_client = None
_db = None


def get_database():
    """Retourne l'instance de la base MongoDB (connexion paresseuse)"""
    global _client, _db
    if _db is not None:
        return _db

    if not config.MONGO_URI:
        raise Exception("Database not configured. Check MONGO_URI environment variable.")

    try:
        _client = MongoClient(config.MONGO_URI, serverSelectionTimeoutMS=5000)
        # Test de connexion
        _client.server_info()
        _db = _client[config.DB_NAME]
        logger.info("✅ MongoDB connected successfully")
    except Exception as e:
        logger.error(f"❌ MongoDB connection failed: {e}")
        _client = None
        raise
    return _db


def get_media_collection():
    """Collection partagée entre œuvres, slider et vidéos"""
    return get_database()[config.COLLECTION_NAME]


def get_admins_collection():
    return get_database()[config.ADMINS_COLLECTION_NAME]
