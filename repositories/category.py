from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.category import Category, CategoryDTO, CategoryFormDTO


class CategoryRepository:

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> list[CategoryDTO]:
        stmt = select(Category).order_by(Category.display_order.asc(), Category.created_at.asc())
        categories = await session_execute(stmt, session)
        return [CategoryDTO.model_validate(category, from_attributes=True)
                for category in categories.scalars().all()]

    @staticmethod
    async def get_by_id(category_id: str, session: AsyncSession | Session) -> CategoryDTO | None:
        stmt = select(Category).where(Category.id == category_id)
        category = await session_execute(stmt, session)
        category = category.scalar()
        if category is None:
            return None
        return CategoryDTO.model_validate(category, from_attributes=True)

    @staticmethod
    async def create(form: CategoryFormDTO, session: AsyncSession | Session) -> str:
        category = Category(**form.model_dump(exclude={'id'}, exclude_none=True))
        session.add(category)
        await session_flush(session)
        return category.id

    @staticmethod
    async def update(category_id: str, values: dict, session: AsyncSession | Session) -> bool:
        """Merge-update: only the given columns change. Returns False when no row matched."""
        stmt = (update(Category)
                .where(Category.id == category_id)
                .values(**values, updated_at=func.now()))
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def delete(category_id: str, session: AsyncSession | Session) -> bool:
        # Products keep their category_id; there is no cascade.
        stmt = delete(Category).where(Category.id == category_id)
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def get_count(session: AsyncSession | Session) -> int:
        stmt = select(func.count(Category.id))
        count = await session_execute(stmt, session)
        return count.scalar_one()
