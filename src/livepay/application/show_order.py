"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from livepay.application.dto import OrderDTO
from livepay.domain.exceptions import EntityNotFoundError, ValidationError
from livepay.domain.model.order import OrderStatus
from livepay.domain.repository.order_repository import OrderRepository
from livepay.domain.repository.payment_event_repository import PaymentEventRepository


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        payment_event_repo: PaymentEventRepository,
    ) -> None:
        self._order_repo = order_repo
        self._payment_event_repo = payment_event_repo

    def handle(self, order_id: int) -> OrderDTO:
        """The order plus every provider event recorded against it."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        payments = self._payment_event_repo.list_for_order(order_id)
        return OrderDTO.from_order(order, payments)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, vendor_id: str | None = None, status: str | None = None) -> list[OrderDTO]:
        if status is None:
            orders = self._order_repo.list_all(vendor_id)
        else:
            try:
                wanted = OrderStatus(status.lower())
            except ValueError as exc:
                raise ValidationError(f"Unknown order status '{status}'") from exc
            orders = self._order_repo.list_by_status(wanted, vendor_id)
        return [OrderDTO.from_order(o) for o in orders]
