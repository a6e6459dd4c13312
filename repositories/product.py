from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.product import Product, ProductDTO, ProductFormDTO, ProductSizeDTO


class ProductRepository:

    @staticmethod
    def _ordered():
        return select(Product).order_by(Product.display_order.asc(), Product.created_at.asc())

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> list[ProductDTO]:
        products = await session_execute(ProductRepository._ordered(), session)
        return [ProductDTO.model_validate(product, from_attributes=True)
                for product in products.scalars().all()]

    @staticmethod
    async def get_by_id(product_id: str, session: AsyncSession | Session) -> ProductDTO | None:
        stmt = select(Product).where(Product.id == product_id)
        product = await session_execute(stmt, session)
        product = product.scalar()
        if product is None:
            return None
        return ProductDTO.model_validate(product, from_attributes=True)

    @staticmethod
    async def get_by_category(category_id: str, session: AsyncSession | Session,
                              limit: int | None = None) -> list[ProductDTO]:
        stmt = ProductRepository._ordered().where(Product.category_id == category_id)
        if limit is not None:
            stmt = stmt.limit(limit)
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(product, from_attributes=True)
                for product in products.scalars().all()]

    @staticmethod
    async def get_by_ids(product_ids: list[str], session: AsyncSession | Session) -> list[ProductDTO]:
        """
        Batch load products by id (favorites page).

        Unknown ids are skipped; results keep catalog order, not the order of product_ids.
        """
        if not product_ids:
            return []
        stmt = ProductRepository._ordered().where(Product.id.in_(product_ids))
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(product, from_attributes=True)
                for product in products.scalars().all()]

    @staticmethod
    async def get_featured(session: AsyncSession | Session, limit: int) -> list[ProductDTO]:
        stmt = ProductRepository._ordered().where(Product.featured == True).limit(limit)
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(product, from_attributes=True)
                for product in products.scalars().all()]

    @staticmethod
    async def get_best_sellers(session: AsyncSession | Session, limit: int) -> list[ProductDTO]:
        stmt = (select(Product)
                .order_by(Product.sold_count.desc(), Product.display_order.asc(), Product.created_at.asc())
                .limit(limit))
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(product, from_attributes=True)
                for product in products.scalars().all()]

    @staticmethod
    async def create(form: ProductFormDTO, session: AsyncSession | Session) -> str:
        product = Product(**form.model_dump(exclude={'id'}, exclude_none=True))
        session.add(product)
        await session_flush(session)
        return product.id

    @staticmethod
    async def update(product_id: str, values: dict, session: AsyncSession | Session) -> bool:
        """Merge-update: only the given columns change. Returns False when no row matched."""
        stmt = (update(Product)
                .where(Product.id == product_id)
                .values(**values, updated_at=func.now()))
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def update_sizes(product_id: str, sizes: list[ProductSizeDTO], session: AsyncSession | Session) -> None:
        """Overwrite the whole sizes array (last write wins)."""
        stmt = (update(Product)
                .where(Product.id == product_id)
                .values(sizes=[size.model_dump() for size in sizes], updated_at=func.now()))
        await session_execute(stmt, session)

    @staticmethod
    async def delete(product_id: str, session: AsyncSession | Session) -> bool:
        stmt = delete(Product).where(Product.id == product_id)
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def get_count(session: AsyncSession | Session) -> int:
        stmt = select(func.count(Product.id))
        count = await session_execute(stmt, session)
        return count.scalar_one()
