"""
Unit Tests: order lifecycle (state machine + OrderService.update_status)
"""

import logging

import pytest

from enums.order_status import OrderStatus
from exceptions import InvalidOrderStateException, OrderNotFoundException
from models.order import OrderDTO
from repositories.order import OrderRepository
from services.order import OrderService
from utils.order_state_machine import OrderStateMachine


async def create_order(session, cart_item_factory, total: float = 100.0) -> OrderDTO:
    order = await OrderRepository.create(OrderDTO(
        first_name="Lisa", last_name="Haddad", email="lisa@example.com", phone="0501234567",
        address="Al Wasl Road 12", city="Dubai", country="UAE",
        items=[cart_item_factory(price=total)], subtotal=total, total=total,
    ), session)
    session.commit()
    return order


class TestOrderStateMachine:

    @pytest.mark.parametrize("from_status,to_status", [
        (OrderStatus.PENDING, OrderStatus.PROCESSING),
        (OrderStatus.PENDING, OrderStatus.COMPLETED),
        (OrderStatus.PENDING, OrderStatus.CANCELLED),
        (OrderStatus.PROCESSING, OrderStatus.COMPLETED),
        (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    ])
    def test_valid_transitions(self, from_status, to_status):
        assert OrderStateMachine.is_valid_transition(from_status, to_status)

    @pytest.mark.parametrize("from_status,to_status", [
        (OrderStatus.COMPLETED, OrderStatus.PENDING),
        (OrderStatus.COMPLETED, OrderStatus.CANCELLED),
        (OrderStatus.CANCELLED, OrderStatus.PROCESSING),
        (OrderStatus.PROCESSING, OrderStatus.PENDING),
    ])
    def test_invalid_transitions(self, from_status, to_status):
        assert not OrderStateMachine.is_valid_transition(from_status, to_status)

    def test_same_status_allowed(self):
        assert OrderStateMachine.is_valid_transition(OrderStatus.COMPLETED, OrderStatus.COMPLETED)

    def test_accepts_raw_values(self):
        assert OrderStateMachine.is_valid_transition("pending", "processing")

    def test_valid_transitions_in_lifecycle_order(self):
        assert OrderStateMachine.get_valid_transitions(OrderStatus.PENDING) == [
            OrderStatus.PROCESSING, OrderStatus.COMPLETED, OrderStatus.CANCELLED]
        assert OrderStateMachine.get_valid_transitions(OrderStatus.CANCELLED) == []

    def test_final_statuses(self):
        assert OrderStateMachine.is_final_status(OrderStatus.COMPLETED)
        assert OrderStateMachine.is_final_status(OrderStatus.CANCELLED)
        assert not OrderStateMachine.is_final_status(OrderStatus.PENDING)

    def test_transition_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="utils.order_state_machine"):
            assert OrderStateMachine.validate_and_log_transition("o1", OrderStatus.PENDING,
                                                                 OrderStatus.PROCESSING, admin_id="a1")

        assert "ORDER_STATUS_TRANSITION: Order o1 pending -> processing by admin a1" in caplog.text


class TestUpdateStatus:

    @pytest.mark.asyncio
    async def test_update(self, session, cart_item_factory):
        order = await create_order(session, cart_item_factory)

        updated = await OrderService.update_status(order.id, OrderStatus.PROCESSING, session, admin_id="a1")

        assert updated.status == OrderStatus.PROCESSING
        assert (await OrderRepository.get_by_id(order.id, session)).status == OrderStatus.PROCESSING

    @pytest.mark.asyncio
    async def test_same_status_is_noop(self, session, cart_item_factory):
        order = await create_order(session, cart_item_factory)

        updated = await OrderService.update_status(order.id, OrderStatus.PENDING, session)

        assert updated.status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_final_status_cannot_change(self, session, cart_item_factory):
        order = await create_order(session, cart_item_factory)
        await OrderService.update_status(order.id, OrderStatus.CANCELLED, session)

        with pytest.raises(InvalidOrderStateException) as exc_info:
            await OrderService.update_status(order.id, OrderStatus.COMPLETED, session)

        assert exc_info.value.current_state == "cancelled"
        assert exc_info.value.required_state == "completed"

    @pytest.mark.asyncio
    async def test_unknown_order(self, session):
        with pytest.raises(OrderNotFoundException):
            await OrderService.update_status("missing", OrderStatus.COMPLETED, session)

    @pytest.mark.asyncio
    async def test_list_filtered_by_status(self, session, cart_item_factory):
        first = await create_order(session, cart_item_factory)
        second = await create_order(session, cart_item_factory)
        await OrderService.update_status(second.id, OrderStatus.COMPLETED, session)

        pending = await OrderService.get_orders(session, OrderStatus.PENDING)
        everything = await OrderService.get_orders(session)

        assert [order.id for order in pending] == [first.id]
        assert len(everything) == 2


class TestOrderDetail:

    @pytest.mark.asyncio
    async def test_pending_order_lists_next_statuses(self, session, cart_item_factory):
        order = await create_order(session, cart_item_factory)

        detail = await OrderService.get_order_detail(order.id, session)

        assert detail.id == order.id
        assert detail.next_statuses == [OrderStatus.PROCESSING, OrderStatus.COMPLETED, OrderStatus.CANCELLED]
        assert detail.is_final is False

    @pytest.mark.asyncio
    async def test_completed_order_is_final(self, session, cart_item_factory):
        order = await create_order(session, cart_item_factory)
        await OrderService.update_status(order.id, OrderStatus.COMPLETED, session)

        detail = await OrderService.get_order_detail(order.id, session)

        assert detail.next_statuses == []
        assert detail.is_final is True
