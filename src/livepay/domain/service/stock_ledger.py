"""Domain service: Stock Ledger.

The ledger is the only component allowed to change a product's
``stock`` / ``reserved_stock`` counters.  Every operation runs as one
load-check-mutate-save cycle while holding the product's lock, so two
requests racing for the last unit can never both observe it as
available.  Callers never read-modify-write the counters themselves.

Release idempotency is the caller's job: the expiration sweep and the
cancel handler only release after winning the order's status CAS.
"""

from __future__ import annotations

import logging

from livepay.domain.exceptions import EntityNotFoundError
from livepay.domain.model.product import Product
from livepay.domain.model.value_objects import Money
from livepay.domain.repository.product_repository import ProductRepository
from livepay.domain.service.locks import KeyedLock

logger = logging.getLogger(__name__)


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or KeyedLock()

    def reserve(self, product_id: str, quantity: int) -> Product:
        """Hold *quantity* units, or raise InsufficientStockError untouched.

        Fails fast: a request that cannot get stock now is not queued
        behind future releases.
        """
        with self._locks.hold(product_id):
            product = self._load(product_id)
            product.reserve(quantity)
            self._product_repo.save(product)
            logger.debug(
                "Reserved %d x %s (reserved=%d/%d)",
                quantity, product.keyword, product.reserved_stock, product.stock,
            )
            return product

    def release(self, product_id: str, quantity: int) -> Product:
        """Return held units to the pool, floored at zero."""
        with self._locks.hold(product_id):
            product = self._load(product_id)
            released = product.release(quantity)
            if released != quantity:
                logger.error(
                    "Released %d of %d requested units of %s: "
                    "reserved counter was already lower",
                    released, quantity, product.keyword,
                )
            self._product_repo.save(product)
            logger.debug(
                "Released %d x %s (reserved=%d/%d)",
                released, product.keyword, product.reserved_stock, product.stock,
            )
            return product

    def commit(self, product_id: str, quantity: int) -> Product:
        """Convert held units into a sale: ``stock`` and ``reserved_stock`` drop."""
        with self._locks.hold(product_id):
            product = self._load(product_id)
            product.commit(quantity)
            self._product_repo.save(product)
            logger.debug(
                "Committed %d x %s (reserved=%d/%d)",
                quantity, product.keyword, product.reserved_stock, product.stock,
            )
            return product

    def set_stock(self, product_id: str, stock: int) -> Product:
        """Vendor restock or correction, serialized with the other operations."""
        with self._locks.hold(product_id):
            product = self._load(product_id)
            product.set_stock(stock)
            self._product_repo.save(product)
            return product

    def update_listing(
        self,
        product_id: str,
        price: Money | None = None,
        active: bool | None = None,
    ) -> Product:
        """Edit price or availability without racing a concurrent counter update."""
        with self._locks.hold(product_id):
            product = self._load(product_id)
            if price is not None:
                product.update_price(price)
            if active is not None:
                product.active = active
            self._product_repo.save(product)
            return product

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
