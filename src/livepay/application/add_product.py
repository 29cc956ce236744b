"""Application service: Add Product use case."""

from __future__ import annotations

from livepay.domain.exceptions import ValidationError
from livepay.domain.model.product import Product
from livepay.domain.model.value_objects import Money
from livepay.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        vendor_id: str,
        keyword: str,
        price: str | int,
        stock: int,
        name: str | None = None,
    ) -> Product:
        """Add a new product to a vendor's catalogue."""
        if not keyword or not keyword.strip():
            raise ValidationError("Product keyword is required")

        existing = self._product_repo.get_by_keyword(vendor_id, keyword)
        if existing is not None:
            raise ValidationError(f"Keyword '{keyword}' already used by '{existing.name}'")

        product = Product.create(
            product_id=self._product_repo.next_id(),
            vendor_id=vendor_id,
            keyword=keyword,
            name=name or keyword,
            price=Money.of(price),
            stock=stock,
        )
        self._product_repo.save(product)
        return product
