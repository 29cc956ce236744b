"""Product aggregate: catalogue entry plus its stock counters.

Products live independently of orders.  Besides name and price, each
product owns two counters:

- ``stock``: total units the vendor still owns,
- ``reserved_stock``: units held by orders that are not settled yet.

The counters must only be changed through the Stock Ledger, which
serializes callers per product before invoking the methods below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from livepay.domain.exceptions import (
    InsufficientStockError,
    ValidationError,
)
from livepay.domain.model.value_objects import Money


def normalize_keyword(keyword: str) -> str:
    return keyword.strip().lower()


@dataclass
class Product:
    """Aggregate root for a sellable item.

    Invariants:
    - ``0 <= reserved_stock <= stock``
    - ``available_stock`` is always >= 0
    """

    id: str
    vendor_id: str
    keyword: str
    name: str
    price: Money
    stock: int
    reserved_stock: int = 0
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        product_id: str,
        vendor_id: str,
        keyword: str,
        name: str,
        price: Money,
        stock: int,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        if not vendor_id:
            raise ValidationError("Vendor ID is required")
        if not keyword or not keyword.strip():
            raise ValidationError("Product keyword is required")
        if any(ch.isspace() for ch in keyword.strip()):
            raise ValidationError("Product keyword must be a single word")
        if price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        return Product(
            id=product_id,
            vendor_id=vendor_id,
            keyword=normalize_keyword(keyword),
            name=(name or keyword).strip(),
            price=price,
            stock=stock,
        )

    @property
    def available_stock(self) -> int:
        return self.stock - self.reserved_stock

    # --- Catalogue edits ------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at reservation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def set_stock(self, stock: int) -> None:
        """Overwrite the total stock after a restock or a count correction."""
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        if stock < self.reserved_stock:
            raise ValidationError(
                f"Cannot set stock of {self.name} to {stock} "
                f"({self.reserved_stock} units are currently reserved)"
            )
        self.stock = stock

    # --- Ledger primitives ----------------------------------------------------

    def reserve(self, quantity: int) -> None:
        """Hold units for an unsettled order.

        Raises InsufficientStockError (without side effects) when fewer
        than *quantity* units are available.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if quantity > self.available_stock:
            raise InsufficientStockError(self.name, quantity, self.available_stock)
        self.reserved_stock += quantity

    def release(self, quantity: int) -> int:
        """Return held units to the sellable pool.

        Floored at zero.  Returns the number of units actually released
        so the ledger can flag an over-release.
        """
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        released = min(quantity, self.reserved_stock)
        self.reserved_stock -= released
        return released

    def commit(self, quantity: int) -> None:
        """Permanently deduct sold units.

        Moves units from reserved to sold: both ``stock`` and
        ``reserved_stock`` decrease by the same amount.
        """
        if quantity <= 0:
            raise ValidationError("Commit quantity must be positive")
        if quantity > self.reserved_stock:
            raise ValidationError(
                f"Cannot commit {quantity} of {self.name} "
                f"(only {self.reserved_stock} currently reserved)"
            )
        self.reserved_stock -= quantity
        self.stock -= quantity
