"""Tests for explicit cancellation."""

import threading

import pytest

from livepay.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from livepay.domain.model.order import OrderStatus
from tests.fakes import FakeClock, make_container, make_product, pay, reserve


@pytest.fixture
def container():
    return make_container(products=[make_product(stock=5)], clock=FakeClock())


class TestCancelOrder:

    def test_cancel_releases_stock(self, container):
        dto = reserve(container, quantity=2)
        container.cancel_order().handle(dto.order_id)

        assert container.order_repo.get_by_id(dto.order_id).status == OrderStatus.CANCELLED
        assert container.product_repo.get_by_id("1").reserved_stock == 0
        assert container.publisher.names() == ["OrderCancelled"]

    def test_cannot_cancel_paid_order(self, container):
        dto = reserve(container, quantity=2)
        pay(container, dto.payment_token, 30000)

        with pytest.raises(InvalidTransitionError, match="paid to cancelled"):
            container.cancel_order().handle(dto.order_id)
        assert container.product_repo.get_by_id("1").stock == 3

    def test_second_cancel_rejected(self, container):
        dto = reserve(container, quantity=2)
        container.cancel_order().handle(dto.order_id)
        with pytest.raises(InvalidTransitionError):
            container.cancel_order().handle(dto.order_id)
        assert container.product_repo.get_by_id("1").reserved_stock == 0

    def test_unknown_order(self, container):
        with pytest.raises(EntityNotFoundError):
            container.cancel_order().handle(99)

    def test_concurrent_cancels_release_once(self, container):
        reserve(container, quantity=1, phone="+221770000009")
        dto = reserve(container, quantity=2)
        barrier = threading.Barrier(5)
        failures = []
        lock = threading.Lock()

        def cancel():
            barrier.wait()
            try:
                container.cancel_order().handle(dto.order_id)
            except InvalidTransitionError:
                with lock:
                    failures.append(1)

        threads = [threading.Thread(target=cancel) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(failures) == 4
        # Only the other buyer's unit is still held.
        assert container.product_repo.get_by_id("1").reserved_stock == 1
