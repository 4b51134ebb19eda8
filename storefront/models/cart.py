from pydantic import BaseModel, Field
from typing import List


class CartProduct(BaseModel):
    """Produit de la boutique tel qu'il entre dans le panier"""
    id: str
    title: str = ""
    image: str = ""
    price: float = 0
    size: str = ""
    medium: str = ""


class CartItem(CartProduct):
    quantity: int = Field(1, ge=1)


class AddToCartRequest(BaseModel):
    product_id: str


class UpdateQuantityRequest(BaseModel):
    quantity: int


class CartView(BaseModel):
    items: List[CartItem]
    total: float
    count: int
    isCartOpen: bool
