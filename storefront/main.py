from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from storefront import config
from storefront.routes import admin, artworks, cart, media

# Configuration du logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Fashionistic Arts API",
    description="API de la galerie et boutique Fashionistic Arts",
    version="1.0.0"
)

# Configuration CORS
allowed_origins = [origin.strip() for origin in config.FRONTEND_URL.split(",")]

# Si on utilise "*" (wildcard), désactiver credentials
allow_credentials = "*" not in allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(artworks.router, prefix="/api/artworks", tags=["artworks"])
app.include_router(media.slider_router, prefix="/api/slider", tags=["slider"])
app.include_router(media.videos_router, prefix="/api/videos", tags=["videos"])
app.include_router(cart.router, prefix="/api/cart", tags=["cart"])

ENDPOINTS = {
    "artworks": "/api/artworks",
    "slider": "/api/slider",
    "videos": "/api/videos",
    "cart": "/api/cart",
    "admin": "/api/admin"
}


@app.get("/")
async def root():
    return {
        "message": "Fashionistic Arts API - FastAPI",
        "status": "healthy",
        "endpoints": ENDPOINTS
    }


@app.get("/api")
async def api_root():
    return {
        "message": "Fashionistic Arts API - FastAPI",
        "status": "healthy",
        "endpoints": ENDPOINTS
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8001, reload=True)
