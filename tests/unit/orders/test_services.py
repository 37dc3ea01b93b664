"""Unit tests for OrderService (everything except closing).

Covers:
- Order creation with a default date and forced ``open`` status.
- Position add/delete on open and closed orders.
- Lenient position add when stock is short.
- Order deletion.
"""

from __future__ import annotations

import logging
from datetime import date

import pytest
from freezegun import freeze_time

from modules.core.models import new_id
from modules.orders.constants import OrderStatus
from modules.orders.dtos import AddPositionDTO, CreateOrderDTO
from modules.orders.exceptions import OrderClosed, OrderNotFound, PositionNotFound
from modules.orders.models import Order, Position
from modules.products.exceptions import ProductNotFound

pytestmark = pytest.mark.unit


@pytest.fixture()
def open_order(order_service):
    return order_service.create_order(CreateOrderDTO(order_date=date(2024, 5, 1)))


@pytest.fixture()
def closed_order(open_order):
    Order.objects.filter(pk=open_order.id).update(status=OrderStatus.CLOSED)
    return open_order


class TestCreateOrder:
    def test_uses_given_date(self, order_service):
        order = order_service.create_order(CreateOrderDTO(order_date=date(2023, 12, 24)))

        assert order.order_date == date(2023, 12, 24)
        assert order.status == OrderStatus.OPEN
        assert order.positions == []

    @freeze_time("2024-03-15 10:00:00")
    def test_defaults_to_today(self, order_service):
        order = order_service.create_order(CreateOrderDTO())

        assert order.order_date == date(2024, 3, 15)
        assert Order.objects.get(pk=order.id).order_date == date(2024, 3, 15)


class TestGetAndList:
    def test_get_includes_positions(self, order_service, open_order, product):
        order_service.add_position(open_order.id, AddPositionDTO(product_id=product.id, quantity=2))

        order = order_service.get_order(open_order.id)

        assert [(p.product_id, p.quantity) for p in order.positions] == [(product.id, 2)]

    def test_get_unknown(self, order_service):
        with pytest.raises(OrderNotFound):
            order_service.get_order(new_id())

    def test_list_returns_every_order(self, order_service, open_order, product):
        other = order_service.create_order(CreateOrderDTO())
        order_service.add_position(other.id, AddPositionDTO(product_id=product.id, quantity=1))

        orders = {o.id: o for o in order_service.list_orders()}

        assert set(orders) == {open_order.id, other.id}
        assert orders[open_order.id].positions == []
        assert len(orders[other.id].positions) == 1


class TestAddPosition:
    def test_adds_to_open_order(self, order_service, open_order, product):
        position = order_service.add_position(
            open_order.id, AddPositionDTO(product_id=product.id, quantity=3)
        )

        assert position.order_id == open_order.id
        assert Position.objects.get(pk=position.id).quantity == 3

    def test_closed_order_rejected_before_insert(
        self, order_service, closed_order, product
    ):
        with pytest.raises(OrderClosed):
            order_service.add_position(
                closed_order.id, AddPositionDTO(product_id=product.id, quantity=1)
            )

        assert not Position.objects.filter(order_id=closed_order.id).exists()

    def test_unknown_order(self, order_service, product):
        with pytest.raises(OrderNotFound):
            order_service.add_position(new_id(), AddPositionDTO(product_id=product.id, quantity=1))

    def test_unknown_product(self, order_service, open_order):
        with pytest.raises(ProductNotFound):
            order_service.add_position(open_order.id, AddPositionDTO(product_id=new_id(), quantity=1))

        assert not Position.objects.exists()

    def test_exceeding_stock_is_logged_and_inserted(
        self, order_service, open_order, product, warehouse, stock, caplog
    ):
        stock(product, warehouse, 2)

        with caplog.at_level(logging.WARNING):
            position = order_service.add_position(
                open_order.id, AddPositionDTO(product_id=product.id, quantity=50)
            )

        assert position.quantity == 50
        assert any(
            "order.position_exceeds_stock" in record.getMessage() for record in caplog.records
        )


class TestDeletePosition:
    def test_deletes_position(self, order_service, open_order, product):
        position = order_service.add_position(
            open_order.id, AddPositionDTO(product_id=product.id, quantity=1)
        )

        order_service.delete_position(open_order.id, position.id)

        assert not Position.objects.filter(pk=position.id).exists()

    def test_position_of_other_order(self, order_service, open_order, product):
        other = order_service.create_order(CreateOrderDTO())
        position = order_service.add_position(
            other.id, AddPositionDTO(product_id=product.id, quantity=1)
        )

        with pytest.raises(PositionNotFound):
            order_service.delete_position(open_order.id, position.id)

        assert Position.objects.filter(pk=position.id).exists()

    def test_closed_order(self, order_service, open_order, product):
        position = order_service.add_position(
            open_order.id, AddPositionDTO(product_id=product.id, quantity=1)
        )
        Order.objects.filter(pk=open_order.id).update(status=OrderStatus.CLOSED)

        with pytest.raises(OrderClosed):
            order_service.delete_position(open_order.id, position.id)


class TestDeleteOrder:
    def test_deletes_order_and_positions(self, order_service, open_order, product):
        order_service.add_position(open_order.id, AddPositionDTO(product_id=product.id, quantity=1))

        order_service.delete_order(open_order.id)

        assert not Order.objects.filter(pk=open_order.id).exists()
        assert not Position.objects.exists()

    def test_closed_order_is_kept(self, order_service, closed_order):
        with pytest.raises(OrderClosed):
            order_service.delete_order(closed_order.id)

        assert Order.objects.filter(pk=closed_order.id).exists()

    def test_unknown_order(self, order_service):
        with pytest.raises(OrderNotFound):
            order_service.delete_order(new_id())
