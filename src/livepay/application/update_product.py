"""Application service: Update Product use case."""

from __future__ import annotations

from livepay.domain.model.product import Product
from livepay.domain.model.value_objects import Money
from livepay.domain.service.stock_ledger import StockLedger


class UpdateProductHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        active: bool | None = None,
    ) -> Product:
        """Update a product's price and/or availability.

        Neither change affects existing orders: they captured a price
        snapshot and keep their hold until settled or expired.
        """
        return self._ledger.update_listing(
            product_id,
            price=Money.of(new_price) if new_price is not None else None,
            active=active,
        )
