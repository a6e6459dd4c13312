from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush, session_refresh
from enums.order_status import OrderStatus
from models.order import Order, OrderDTO


class OrderRepository:

    @staticmethod
    async def create(order_dto: OrderDTO, session: AsyncSession | Session) -> OrderDTO:
        """
        Insert a new order. Status and created_at are assigned here, not by the caller.
        """
        order = Order(**order_dto.model_dump(exclude={'id', 'status', 'items', 'created_at', 'updated_at'}),
                      items=[item.model_dump() for item in order_dto.items],
                      status=OrderStatus.PENDING)
        session.add(order)
        await session_flush(session)
        await session_refresh(session, order)
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_by_id(order_id: str, session: AsyncSession | Session) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        order = await session_execute(stmt, session)
        order = order.scalar()
        if order is None:
            return None
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_all(session: AsyncSession | Session, status: OrderStatus | None = None) -> list[OrderDTO]:
        """Newest first, optionally filtered by status."""
        stmt = select(Order).order_by(Order.created_at.desc())
        if status is not None:
            stmt = stmt.where(Order.status == status)
        orders = await session_execute(stmt, session)
        return [OrderDTO.model_validate(order, from_attributes=True) for order in orders.scalars().all()]

    @staticmethod
    async def update_status(order_id: str, status: OrderStatus, session: AsyncSession | Session) -> None:
        stmt = (update(Order)
                .where(Order.id == order_id)
                .values(status=status, updated_at=func.now()))
        await session_execute(stmt, session)

    @staticmethod
    async def get_stats_rows(session: AsyncSession | Session) -> list[tuple[OrderStatus, int, float]]:
        """(status, count, Σ total) per status."""
        stmt = (select(Order.status, func.count(Order.id), func.coalesce(func.sum(Order.total), 0.0))
                .group_by(Order.status))
        rows = await session_execute(stmt, session)
        return [(row[0], row[1], row[2]) for row in rows.all()]
