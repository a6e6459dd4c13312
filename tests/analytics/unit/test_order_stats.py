"""
Unit Tests: dashboard statistics
"""

import pytest

from enums.order_status import OrderStatus
from models.bilingual import BilingualText
from models.category import CategoryFormDTO
from models.order import OrderDTO
from models.product import ProductFormDTO
from repositories.category import CategoryRepository
from repositories.order import OrderRepository
from repositories.product import ProductRepository
from services.analytics import OrderAnalyticsService


async def create_order(session, total: float) -> str:
    order = await OrderRepository.create(OrderDTO(
        first_name="Lisa", last_name="Haddad", email="lisa@example.com", phone="0501234567",
        address="Al Wasl Road 12", city="Dubai", country="UAE", subtotal=total, total=total,
    ), session)
    return order.id


class TestOrderStats:

    @pytest.mark.asyncio
    async def test_empty_store(self, session):
        stats = await OrderAnalyticsService.get_order_stats(session)

        assert stats.total_orders == 0
        assert stats.total_revenue == 0.0

    @pytest.mark.asyncio
    async def test_counts_and_revenue(self, session):
        await create_order(session, 100.0)
        completed = await create_order(session, 250.0)
        cancelled = await create_order(session, 50.0)
        processing = await create_order(session, 30.0)
        await OrderRepository.update_status(completed, OrderStatus.COMPLETED, session)
        await OrderRepository.update_status(cancelled, OrderStatus.CANCELLED, session)
        await OrderRepository.update_status(processing, OrderStatus.PROCESSING, session)
        session.commit()

        stats = await OrderAnalyticsService.get_order_stats(session)

        assert stats.total_orders == 4
        assert stats.pending_orders == 1
        assert stats.completed_orders == 1
        assert stats.cancelled_orders == 1
        # Every status counts towards revenue
        assert stats.total_revenue == pytest.approx(430.0)

    @pytest.mark.asyncio
    async def test_dashboard(self, session):
        await CategoryRepository.create(CategoryFormDTO(name=BilingualText(en="Oud", ar="عود")), session)
        await ProductRepository.create(ProductFormDTO(name=BilingualText(en="Oud Royal", ar="عود ملكي")), session)
        await ProductRepository.create(ProductFormDTO(name=BilingualText(en="Musk", ar="مسك")), session)
        session.commit()

        dashboard = await OrderAnalyticsService.get_dashboard(session)

        assert dashboard["products"] == 2
        assert dashboard["categories"] == 1
        assert dashboard["orders"].total_orders == 0
