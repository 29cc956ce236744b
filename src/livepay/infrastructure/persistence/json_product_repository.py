"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from livepay.domain.model.product import Product, normalize_keyword
from livepay.domain.model.value_objects import DEFAULT_CURRENCY, Money
from livepay.domain.repository.product_repository import ProductRepository
from livepay.infrastructure.persistence.json_file import JsonListFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonListFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        products = self._file.load()
        if not products:
            return "1"
        return str(max(int(p["id"]) for p in products) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_keyword(self, vendor_id: str, keyword: str) -> Product | None:
        wanted = normalize_keyword(keyword)
        for raw in self._file.load():
            if raw["vendor_id"] == vendor_id and raw["keyword"] == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self, vendor_id: str | None = None) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if vendor_id is None or raw["vendor_id"] == vendor_id
        ]

    def save(self, product: Product) -> None:
        self._file.upsert(self._to_raw(product), key="id")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "vendor_id": product.vendor_id,
            "keyword": product.keyword,
            "name": product.name,
            "price": product.price.amount,
            "currency": product.price.currency,
            "stock": product.stock,
            "reserved_stock": product.reserved_stock,
            "active": product.active,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            vendor_id=raw["vendor_id"],
            keyword=raw["keyword"],
            name=raw["name"],
            price=Money(raw["price"], raw.get("currency", DEFAULT_CURRENCY)),
            stock=raw["stock"],
            reserved_stock=raw.get("reserved_stock", 0),
            active=raw.get("active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
