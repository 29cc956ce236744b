"""Application service: Show Payment Page use case (public query).

Backs ``GET /pay/<token>``.  Read-only; returns a projection that never
contains internal ids, the vendor id, or the buyer's phone number.
"""

from __future__ import annotations

from livepay.application.configure_vendor import load_vendor_config
from livepay.application.dto import PaymentPageDTO
from livepay.domain.exceptions import EntityNotFoundError
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.repository.vendor_repository import VendorRepository


class ShowPaymentPageHandler:

    def __init__(self, order_repo: OrderRepository, vendor_repo: VendorRepository) -> None:
        self._order_repo = order_repo
        self._vendor_repo = vendor_repo

    def handle(self, token: str) -> PaymentPageDTO:
        order = self._order_repo.get_by_token(token) if token else None
        if order is None:
            raise EntityNotFoundError("Payment link not found")
        vendor = load_vendor_config(self._vendor_repo, order.vendor_id)
        return PaymentPageDTO(
            product_name=order.product_name,
            amount=order.total_amount.amount,
            client_name=order.buyer_name,
            status=order.status.value,
            expires_at=order.expires_at,
            vendor_name=vendor.business_name,
        )
