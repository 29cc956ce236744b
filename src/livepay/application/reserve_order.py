"""Application service: Reserve Order use case.

Entry point for the chat collaborator.  One call yields exactly one
ledger reservation and exactly one RESERVED order, or neither:

1. Check the buyer input and resolve the keyword to the vendor's
   product (must be active).
2. Ask the Stock Ledger to hold the units (fails fast if short).
3. Issue a payment token and insert the order with its deadline.
4. If step 3 fails for any reason, release the hold immediately.
"""

from __future__ import annotations

import logging

from livepay.application.clock import Clock, utc_now
from livepay.application.configure_vendor import load_vendor_config
from livepay.application.dto import ReservationDTO, ReserveRequest
from livepay.domain.exceptions import (
    ProductInactiveError,
    ProductNotFoundError,
    TokenCollisionError,
)
from livepay.domain.model.order import Order, check_reservation_request
from livepay.domain.model.product import Product
from livepay.domain.model.value_objects import Quantity
from livepay.domain.model.vendor import DEFAULT_RESERVATION_MINUTES
from livepay.domain.repository.product_repository import ProductRepository
from livepay.domain.repository.vendor_repository import VendorRepository
from livepay.domain.service.order_store import OrderStore
from livepay.domain.service.payment_tokens import MAX_ATTEMPTS, PaymentTokenIssuer
from livepay.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class ReserveOrderHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        vendor_repo: VendorRepository,
        ledger: StockLedger,
        order_store: OrderStore,
        token_issuer: PaymentTokenIssuer,
        clock: Clock = utc_now,
        default_minutes: int = DEFAULT_RESERVATION_MINUTES,
    ) -> None:
        self._product_repo = product_repo
        self._vendor_repo = vendor_repo
        self._ledger = ledger
        self._order_store = order_store
        self._token_issuer = token_issuer
        self._clock = clock
        self._default_minutes = default_minutes

    def handle(self, request: ReserveRequest) -> ReservationDTO:
        quantity = Quantity(request.quantity)
        check_reservation_request(request.buyer_phone, quantity)

        product = self._product_repo.get_by_keyword(
            request.vendor_id, request.product_keyword
        )
        if product is None:
            raise ProductNotFoundError(
                f"Product not found: '{request.product_keyword}'"
            )
        if not product.active:
            raise ProductInactiveError(
                f"Product '{product.name}' is not available for reservation"
            )

        vendor = load_vendor_config(
            self._vendor_repo, request.vendor_id, self._default_minutes
        )

        # Raises InsufficientStockError with no side effects.
        held = self._ledger.reserve(product.id, quantity.value)

        try:
            order = self._insert_order(request, quantity, held, vendor.reservation_duration_minutes)
        except Exception:
            self._ledger.release(product.id, quantity.value)
            logger.warning(
                "Rolled back hold of %d x %s after order creation failed",
                quantity.value, product.keyword,
            )
            raise

        logger.info(
            "Order #%s reserved: %d x %s for %s until %s",
            order.id, quantity.value, product.keyword,
            order.buyer_phone, order.expires_at.isoformat(),
        )
        return ReservationDTO(
            order_id=order.id,  # type: ignore[arg-type]
            payment_token=order.payment_token,
            amount=order.total_amount.amount,
            expires_at=order.expires_at,
        )

    def _insert_order(
        self,
        request: ReserveRequest,
        quantity: Quantity,
        product: Product,
        hold_minutes: int,
    ) -> Order:
        now = self._clock()
        for _ in range(MAX_ATTEMPTS):
            order = Order.reserve(
                vendor_id=request.vendor_id,
                product_id=product.id,
                product_name=product.name,
                buyer_phone=request.buyer_phone,
                buyer_name=request.buyer_name,
                quantity=quantity,
                unit_price=product.price,  # <-- price snapshot
                payment_token=self._token_issuer.issue(),
                now=now,
                hold_minutes=hold_minutes,
            )
            try:
                return self._order_store.add(order)
            except TokenCollisionError:
                logger.warning("Payment token collision on insert, regenerating")
        raise TokenCollisionError(
            f"Could not store order with a unique token after {MAX_ATTEMPTS} attempts"
        )
