"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from livepay.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    keyword: str
    product_name: str
    price: str
    total: int
    reserved: int
    available: int
    active: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, vendor_id: str | None = None) -> list[InventoryLineDTO]:
        return [
            InventoryLineDTO(
                product_id=p.id,
                keyword=p.keyword,
                product_name=p.name,
                price=str(p.price),
                total=p.stock,
                reserved=p.reserved_stock,
                available=p.available_stock,
                active=p.active,
            )
            for p in self._product_repo.list_all(vendor_id)
        ]
