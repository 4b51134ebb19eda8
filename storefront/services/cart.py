"""
Panier d'achat éphémère.

Chaque session navigateur possède son propre CartStore, gardé en mémoire du
processus : aucune persistance, un redémarrage vide tous les paniers.
"""

from typing import Dict, List, Optional
import secrets
import time
import logging

from storefront import config
from storefront.models.cart import CartItem, CartProduct

logger = logging.getLogger(__name__)


class CartStore:

    def __init__(self):
        self._items: List[CartItem] = []
        self.is_cart_open = False

    @property
    def items(self) -> List[CartItem]:
        return [item.model_copy() for item in self._items]

    @property
    def total(self) -> float:
        """Recalculé à chaque lecture"""
        return sum(item.price * item.quantity for item in self._items)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def _find(self, product_id: str) -> Optional[CartItem]:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    def add_item(self, product: CartProduct):
        """Un seul article par produit : un ajout répété incrémente la quantité"""
        existing = self._find(product.id)
        if existing:
            existing.quantity += 1
            return
        self._items.append(CartItem(**product.model_dump(), quantity=1))

    def remove_item(self, product_id: str):
        self._items = [item for item in self._items if item.id != product_id]

    def update_quantity(self, product_id: str, quantity: int):
        if quantity <= 0:
            self.remove_item(product_id)
            return
        existing = self._find(product_id)
        if existing:
            existing.quantity = quantity

    def clear_cart(self):
        self._items = []

    def toggle_cart(self):
        self.is_cart_open = not self.is_cart_open

    def to_dict(self) -> Dict:
        return {
            "items": [item.model_dump() for item in self._items],
            "total": self.total,
            "count": self.count,
            "isCartOpen": self.is_cart_open,
        }


class CartRegistry:
    """
    Un CartStore par identifiant de session (cookie cart_id).
    Les paniers inactifs depuis `ttl_hours` sont purgés ; au-delà de
    `max_carts`, le panier le moins récemment utilisé est évincé.
    """

    def __init__(self, ttl_hours: int = None, max_carts: int = None, clock=time.monotonic):
        self.ttl = (ttl_hours if ttl_hours is not None else config.CART_TTL_HOURS) * 3600
        self.max_carts = max_carts if max_carts is not None else config.MAX_CARTS
        self._clock = clock
        self._carts: Dict[str, CartStore] = {}
        self._last_access: Dict[str, float] = {}

    def __len__(self):
        return len(self._carts)

    def _purge_expired(self, now: float):
        expired = [cart_id for cart_id, seen in self._last_access.items() if now - seen > self.ttl]
        for cart_id in expired:
            self.discard(cart_id)
        if expired:
            logger.info(f"Expired {len(expired)} idle cart(s)")

    def get(self, cart_id: Optional[str]) -> Optional[CartStore]:
        """Panier enregistré pour cette session, ou None (rien n'est créé)"""
        now = self._clock()
        self._purge_expired(now)
        if not cart_id or cart_id not in self._carts:
            return None
        self._last_access[cart_id] = now
        return self._carts[cart_id]

    def create(self):
        """Enregistre un panier neuf et retourne (cart_id, panier)"""
        now = self._clock()
        self._purge_expired(now)
        while self._carts and len(self._carts) >= self.max_carts:
            oldest = min(self._last_access, key=self._last_access.get)
            self.discard(oldest)
            logger.warning(f"Cart limit reached, evicted session {oldest}")
        cart_id = secrets.token_urlsafe(16)
        self._carts[cart_id] = CartStore()
        self._last_access[cart_id] = now
        logger.info(f"New cart session: {cart_id}")
        return cart_id, self._carts[cart_id]

    def get_or_create(self, cart_id: Optional[str]):
        """Retourne (cart_id, panier) ; un identifiant inconnu ouvre un panier neuf"""
        cart = self.get(cart_id)
        if cart is not None:
            return cart_id, cart
        return self.create()

    def discard(self, cart_id: str):
        self._carts.pop(cart_id, None)
        self._last_access.pop(cart_id, None)
