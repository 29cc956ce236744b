"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from livepay.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_keyword(self, vendor_id: str, keyword: str) -> Product | None:
        """Return the vendor's product for a keyword (case-insensitive), or None."""

    @abstractmethod
    def list_all(self, vendor_id: str | None = None) -> list[Product]:
        """Return every product, optionally restricted to one vendor."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
