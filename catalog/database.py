import logging
import threading
import uuid
from typing import Dict, Iterable, List, Optional

from .models import Product, ProductIn

# This file holds the in-memory product store and its lock.

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS: List[Dict[str, object]] = [
    {
        "name": "Wireless Mouse",
        "description": "Ergonomic 2.4GHz wireless mouse with silent clicks",
        "price": 24.99,
        "category": "Electronics",
        "stock": 120,
    },
    {
        "name": "Mechanical Keyboard",
        "description": "Tenkeyless keyboard with hot-swappable brown switches",
        "price": 89.0,
        "category": "Electronics",
        "stock": 35,
    },
    {
        "name": "Red Pen",
        "description": "Smooth gel ink pen, 0.5mm tip",
        "price": 1.5,
        "category": "Office",
        "stock": 500,
    },
    {
        "name": "Blue Pen",
        "description": "Ballpoint pen with blue ink",
        "price": 2.5,
        "category": "Office",
        "stock": 0,
    },
    {
        "name": "Coffee Mug",
        "description": "Ceramic mug, 350ml, dishwasher safe",
        "price": 9.75,
        "category": "Kitchen",
        "stock": 60,
    },
]


class ProductStore:
    """Ordered in-memory collection of products.

    Every public method takes the store lock, so a reader never sees a
    half-applied write. Records handed out are copies.
    """

    def __init__(self, products: Optional[Iterable[ProductIn]] = None):
        self._products: List[Product] = []
        self._lock = threading.RLock()
        if products is not None:
            self.seed(products)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def count(self) -> int:
        return len(self)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def _new_id(self) -> str:
        while True:
            pid = uuid.uuid4().hex
            if self._index_of(pid) < 0:
                return pid

    def list(self) -> List[Product]:
        with self._lock:
            return [p.model_copy() for p in self._products]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i < 0:
                return None
            return self._products[i].model_copy()

    def insert(self, product: ProductIn) -> Product:
        with self._lock:
            stored = Product(id=self._new_id(), **product.model_dump())
            self._products.append(stored)
            logger.info("inserted product %s (%s)", stored.id, stored.name)
            return stored.model_copy()

    def replace(self, product_id: str, fields: ProductIn) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i < 0:
                return None
            updated = Product(id=product_id, **fields.model_dump())
            self._products[i] = updated
            logger.info("replaced product %s", product_id)
            return updated.model_copy()

    def remove(self, product_id: str) -> bool:
        with self._lock:
            i = self._index_of(product_id)
            if i < 0:
                return False
            del self._products[i]
            logger.info("removed product %s", product_id)
            return True

    def seed(self, products: Iterable[ProductIn]) -> List[Product]:
        with self._lock:
            out = [self.insert(p) for p in products]
        logger.debug("seeded %d products", len(out))
        return out

    # Utility: reset (for tests/demo)
    def reset(self) -> None:
        with self._lock:
            self._products.clear()


def sample_store() -> ProductStore:
    return ProductStore(ProductIn(**p) for p in SAMPLE_PRODUCTS)
