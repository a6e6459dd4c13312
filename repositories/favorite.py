from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.favorite import Favorite, FavoriteDTO


class FavoriteRepository:

    @staticmethod
    async def get(user_id: str, session: AsyncSession | Session) -> FavoriteDTO | None:
        stmt = select(Favorite).where(Favorite.user_id == user_id)
        favorite = await session_execute(stmt, session)
        favorite = favorite.scalar()
        if favorite is None:
            return None
        return FavoriteDTO.model_validate(favorite, from_attributes=True)

    @staticmethod
    async def save(user_id: str, product_ids: list[str], session: AsyncSession | Session) -> None:
        existing = await FavoriteRepository.get(user_id, session)
        if existing is None:
            session.add(Favorite(user_id=user_id, product_ids=list(product_ids)))
            await session_flush(session)
        else:
            stmt = (update(Favorite)
                    .where(Favorite.user_id == user_id)
                    .values(product_ids=list(product_ids), updated_at=func.now()))
            await session_execute(stmt, session)

    @staticmethod
    async def delete(user_id: str, session: AsyncSession | Session) -> None:
        stmt = delete(Favorite).where(Favorite.user_id == user_id)
        await session_execute(stmt, session)
