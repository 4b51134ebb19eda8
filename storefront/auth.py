"""
Authentification admin par email / mot de passe.
Tout compte authentifié dispose des droits admin complets.
"""
from fastapi import HTTPException, Request
from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta
from typing import Optional
import secrets
import logging

from storefront import config

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
AUTH_COOKIE = "auth_token"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Clé de secours propre au processus, utilisée seulement sans SECRET_KEY
_process_key: Optional[str] = None


def get_signing_key() -> str:
    """
    SECRET_KEY si défini. Sinon une clé aléatoire générée une fois par
    processus : les sessions ne survivent pas à un redémarrage.
    """
    global _process_key
    if config.SECRET_KEY:
        return config.SECRET_KEY
    if _process_key is None:
        logger.warning("⚠️ SECRET_KEY not set: using a random per-process key, sessions end on restart")
        _process_key = secrets.token_urlsafe(32)
    return _process_key


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(email: str, expires_delta: Optional[timedelta] = None):
    if expires_delta is None:
        expires_delta = timedelta(hours=config.SESSION_DURATION_HOURS)
    to_encode = {"sub": email, "exp": datetime.utcnow() + expires_delta}
    return jwt.encode(to_encode, get_signing_key(), algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[str]:
    """Retourne l'email du compte ou None si le token est invalide / expiré"""
    if not token:
        return None
    try:
        payload = jwt.decode(token, get_signing_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")


def authenticate_admin(repository, email: str, password: str):
    account = repository.get_by_email(email)
    if not account:
        return None
    if not verify_password(password, account["hashedPassword"]):
        return None
    return account


def get_cookie_settings(is_delete: bool = False):
    settings = {
        "httponly": True,
        "secure": config.COOKIE_SECURE,
        "samesite": "none" if config.COOKIE_SECURE else "lax",
    }
    settings["max_age"] = 0 if is_delete else config.SESSION_DURATION_HOURS * 3600
    return settings


# === Dépendance FastAPI pour l'authentification ===

async def require_admin_auth(request: Request) -> str:
    """
    Dépendance FastAPI pour les routes protégées.
    Retourne l'email de l'admin connecté.
    """
    token = request.cookies.get(AUTH_COOKIE)
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"}
        )

    email = verify_token(token)
    if not email:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return email
