# storefront/routes/cart.py
from fastapi import APIRouter, Depends, HTTPException, Request, Response
import logging

from storefront.dependencies import get_cart_registry, get_catalog
from storefront.models.cart import AddToCartRequest, CartProduct, CartView, UpdateQuantityRequest
from storefront.services.cart import CartRegistry, CartStore
from storefront.services.catalog import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter()

CART_COOKIE = "cart_id"


def current_cart(
    request: Request,
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartStore:
    """
    Panier de la session s'il existe, sinon un panier vide non enregistré :
    les lectures et les retraits n'ouvrent jamais de session.
    """
    return registry.get(request.cookies.get(CART_COOKIE)) or CartStore()


def open_cart(request: Request, response: Response, registry: CartRegistry) -> CartStore:
    """Panier de la session courante, enregistré à la première modification"""
    cart_id, cart = registry.get_or_create(request.cookies.get(CART_COOKIE))
    if cart_id != request.cookies.get(CART_COOKIE):
        response.set_cookie(key=CART_COOKIE, value=cart_id, httponly=True, samesite="lax")
    return cart


def get_cart(
    request: Request,
    response: Response,
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartStore:
    return open_cart(request, response, registry)


def product_from_artwork(artwork: dict) -> CartProduct:
    # Un prix absent vaut 0 dans le panier
    return CartProduct(
        id=artwork["id"],
        title=artwork.get("title", ""),
        image=artwork.get("imageUrl") or "",
        price=artwork.get("price") or 0,
        size=artwork.get("size", ""),
        medium=artwork.get("medium", ""),
    )


@router.get("/", response_model=CartView)
def read_cart(cart: CartStore = Depends(current_cart)):
    return cart.to_dict()


@router.post("/items", response_model=CartView)
def add_item(
    payload: AddToCartRequest,
    request: Request,
    response: Response,
    registry: CartRegistry = Depends(get_cart_registry),
    catalog: CatalogService = Depends(get_catalog),
):
    artwork = catalog.get_artwork(payload.product_id)
    if not artwork:
        raise HTTPException(status_code=404, detail="Product not found")
    if not artwork.get("isForSale"):
        raise HTTPException(status_code=400, detail="This artwork is not for sale")
    cart = open_cart(request, response, registry)
    cart.add_item(product_from_artwork(artwork))
    return cart.to_dict()


@router.put("/items/{product_id}", response_model=CartView)
def update_quantity(product_id: str, payload: UpdateQuantityRequest, cart: CartStore = Depends(current_cart)):
    cart.update_quantity(product_id, payload.quantity)
    return cart.to_dict()


@router.delete("/items/{product_id}", response_model=CartView)
def remove_item(product_id: str, cart: CartStore = Depends(current_cart)):
    cart.remove_item(product_id)
    return cart.to_dict()


@router.delete("/", response_model=CartView)
def clear_cart(cart: CartStore = Depends(current_cart)):
    cart.clear_cart()
    return cart.to_dict()


@router.post("/toggle", response_model=CartView)
def toggle_cart(cart: CartStore = Depends(get_cart)):
    cart.toggle_cart()
    return cart.to_dict()
