"""
Configuration centrale du backend Fashionistic Arts.
Toutes les valeurs viennent des variables d'environnement (.env accepté).
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(key: str, default: bool = False) -> bool:
    val = os.getenv(key, "").lower()
    if val in ("true", "1", "yes"):
        return True
    if val in ("false", "0", "no"):
        return False
    return default


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Base de données (collection unique partagée œuvres / slider / vidéos)
# ---------------------------------------------------------------------------
MONGO_URI = os.getenv("MONGO_URI")
DB_NAME = os.getenv("MONGO_DB", "fashionistic_arts")
COLLECTION_NAME = os.getenv("COLLECTION_NAME", "Fashionistic_Arts")
ADMINS_COLLECTION_NAME = os.getenv("ADMINS_COLLECTION", "admins")

# ---------------------------------------------------------------------------
# Stockage objet (S3 / R2)
# ---------------------------------------------------------------------------
STORAGE_NAMESPACE = os.getenv("STORAGE_NAMESPACE", COLLECTION_NAME)
S3_ENDPOINT = os.getenv("S3_ENDPOINT")
S3_BUCKET = os.getenv("S3_BUCKET")
S3_ACCESS_KEY = os.getenv("S3_ACCESS_KEY")
S3_SECRET_KEY = os.getenv("S3_SECRET_KEY")
S3_REGION = os.getenv("S3_REGION", "auto")
S3_PUBLIC_URL = os.getenv("S3_PUBLIC_URL")

# ---------------------------------------------------------------------------
# Authentification admin
# ---------------------------------------------------------------------------
# Sans SECRET_KEY, une clé aléatoire est générée par processus (voir auth.py)
SECRET_KEY = os.getenv("SECRET_KEY")
SESSION_DURATION_HOURS = _env_int("SESSION_DURATION_HOURS", 2)
COOKIE_SECURE = _env_bool("COOKIE_SECURE", False)
MIN_PASSWORD_LENGTH = 6

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# ---------------------------------------------------------------------------
# Limites d'upload (vérifiées avant tout appel réseau)
# ---------------------------------------------------------------------------
UPLOAD_LIMIT = _env_int("UPLOAD_LIMIT", 15)
MAX_FILES_PER_UPLOAD = _env_int("MAX_FILES_PER_UPLOAD", 15)
SLIDER_LIMIT = _env_int("SLIDER_LIMIT", 5)
SLIDER_MAX_BYTES = 50 * 1024 * 1024
VIDEO_MAX_BYTES = 100 * 1024 * 1024

# ---------------------------------------------------------------------------
# Paniers (mémoire du processus)
# ---------------------------------------------------------------------------
CART_TTL_HOURS = _env_int("CART_TTL_HOURS", 24)
MAX_CARTS = _env_int("MAX_CARTS", 10000)

DEFAULT_ARTIST = "Fashionistic Arts"
