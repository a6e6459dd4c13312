import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit
from repositories.favorite import FavoriteRepository


class FavoritesService:
    """
    Favorites of signed-in users (favorites/<user_id>).

    A user without favorites has no document at all: removing the last
    product deletes it.
    """

    @staticmethod
    async def get_product_ids(user_id: str, session: AsyncSession | Session) -> list[str]:
        favorite = await FavoriteRepository.get(user_id, session)
        return favorite.product_ids if favorite else []

    @staticmethod
    async def add(user_id: str, product_id: str, session: AsyncSession | Session) -> list[str]:
        product_ids = await FavoritesService.get_product_ids(user_id, session)
        if product_id in product_ids:
            return product_ids
        product_ids.append(product_id)
        await FavoriteRepository.save(user_id, product_ids, session)
        await session_commit(session)
        logging.info(f"[Favorites] User {user_id} added product {product_id}")
        return product_ids

    @staticmethod
    async def remove(user_id: str, product_id: str, session: AsyncSession | Session) -> list[str]:
        product_ids = await FavoritesService.get_product_ids(user_id, session)
        if product_id not in product_ids:
            return product_ids
        product_ids.remove(product_id)
        if product_ids:
            await FavoriteRepository.save(user_id, product_ids, session)
        else:
            await FavoriteRepository.delete(user_id, session)
        await session_commit(session)
        logging.info(f"[Favorites] User {user_id} removed product {product_id}")
        return product_ids
