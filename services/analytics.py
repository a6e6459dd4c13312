from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from enums.order_status import OrderStatus
from models.order import OrderStatsDTO
from repositories.category import CategoryRepository
from repositories.order import OrderRepository
from repositories.product import ProductRepository


class OrderAnalyticsService:

    @staticmethod
    async def get_order_stats(session: AsyncSession | Session) -> OrderStatsDTO:
        """
        Dashboard order cards.

        Revenue sums the total of every order regardless of status, as the
        dashboard always has.
        """
        stats = OrderStatsDTO()
        for status, count, revenue in await OrderRepository.get_stats_rows(session):
            stats.total_orders += count
            stats.total_revenue += float(revenue or 0.0)
            if status == OrderStatus.PENDING:
                stats.pending_orders = count
            elif status == OrderStatus.COMPLETED:
                stats.completed_orders = count
            elif status == OrderStatus.CANCELLED:
                stats.cancelled_orders = count
        return stats

    @staticmethod
    async def get_dashboard(session: AsyncSession | Session) -> dict:
        return {
            "orders": await OrderAnalyticsService.get_order_stats(session),
            "products": await ProductRepository.get_count(session),
            "categories": await CategoryRepository.get_count(session),
        }
