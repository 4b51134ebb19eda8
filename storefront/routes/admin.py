from fastapi import APIRouter, Depends, HTTPException, Response, status
import logging

from storefront.auth import (
    AUTH_COOKIE,
    authenticate_admin,
    create_access_token,
    get_cookie_settings,
    get_password_hash,
    require_admin_auth,
)
from storefront.dependencies import get_admin_repository, get_catalog
from storefront.models.admin import AdminLogin, AdminSignup
from storefront.services.catalog import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup")
async def signup(admin_data: AdminSignup, repository=Depends(get_admin_repository)):
    try:
        admin_id = repository.create(admin_data.email, get_password_hash(admin_data.password))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating admin account: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create account. Please try again."
        )
    return {"message": "Account created successfully", "admin_id": admin_id}


@router.post("/login")
async def login(creds: AdminLogin, response: Response, repository=Depends(get_admin_repository)):
    admin = authenticate_admin(repository, creds.email, creds.password)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    repository.update_last_login(admin["email"])
    response.set_cookie(key=AUTH_COOKIE, value=create_access_token(admin["email"]), **get_cookie_settings())
    logger.info(f"Admin login: {admin['email']}")
    return {"success": True, "email": admin["email"]}


@router.get("/verify")
async def verify(response: Response, email: str = Depends(require_admin_auth)):
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, private"
    return {"valid": True, "email": email}


@router.post("/logout")
async def logout(response: Response):
    response.set_cookie(key=AUTH_COOKIE, value="", **get_cookie_settings(is_delete=True))
    return {"message": "Logged out"}


@router.get("/dashboard/stats")
def get_dashboard_stats(
    catalog: CatalogService = Depends(get_catalog),
    _: str = Depends(require_admin_auth),
):
    """Compteurs du tableau de bord (œuvres, emplacements restants, slider, vidéos)"""
    return catalog.dashboard_stats()
