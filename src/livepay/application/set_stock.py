"""Application service: Set Stock use case."""

from __future__ import annotations

from livepay.domain.exceptions import ProductNotFoundError
from livepay.domain.model.product import Product
from livepay.domain.repository.product_repository import ProductRepository
from livepay.domain.service.stock_ledger import StockLedger


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, vendor_id: str, keyword: str, stock: int) -> Product:
        """Set the total stock of a product (must cover current holds)."""
        product = self._product_repo.get_by_keyword(vendor_id, keyword)
        if product is None:
            raise ProductNotFoundError(f"Product not found: '{keyword}'")
        return self._ledger.set_stock(product.id, stock)
