import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from enums.language import Language
from exceptions import ProductNotFoundException, CategoryNotFoundException
from models.bilingual import resolve
from models.category import CategoryDTO
from models.product import ProductDTO, ProductFilterDTO
from repositories.category import CategoryRepository
from repositories.product import ProductRepository
from utils.text_search import normalize_text, split_words, matches_all_words

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"
FEATURED_LIMIT = 4
BEST_SELLERS_LIMIT = 8
CATEGORY_PREVIEW_LIMIT = 8


class CatalogService:
    """
    Read path of the storefront.

    Repositories return everything in display order; filtering and search
    run in memory over the fetched list, so results keep that order.
    """

    @staticmethod
    def filter_products(products: list[ProductDTO], product_filter: ProductFilterDTO,
                        language: Language) -> list[ProductDTO]:
        """
        Products page filter.

        - category: exact match, None or "all" means any category
        - query: case-insensitive substring of name or description in the active language
        - price: kept when ANY size price lies in [min_price, max_price] (inclusive)
        """
        query = product_filter.query.strip().lower()
        filtered = []
        for product in products:
            if product_filter.category_id not in (None, "", ALL_CATEGORIES) \
                    and product.category_id != product_filter.category_id:
                continue
            if query:
                name = resolve(product.name, language).lower()
                description = resolve(product.description, language).lower()
                if query not in name and query not in description:
                    continue
            if not any(product_filter.min_price <= size.price <= product_filter.max_price
                       for size in product.sizes):
                continue
            filtered.append(product)
        return filtered

    @staticmethod
    def search_products(products: list[ProductDTO], query: str, language: Language) -> list[ProductDTO]:
        """
        Search page.

        Every word of the query must appear in the name or the description
        (Arabic-normalized, see utils.text_search). Products whose whole
        name equals the query come first; the rest keep catalog order.
        """
        words = split_words(query)
        if not words:
            return []
        normalized_query = " ".join(words)

        matches = [product for product in products
                   if matches_all_words(words,
                                        resolve(product.name, language),
                                        resolve(product.description, language))]
        # sorted() is stable: ties keep fetch order
        return sorted(matches,
                      key=lambda product: normalize_text(resolve(product.name, language)).strip() != normalized_query)

    @staticmethod
    async def get_categories(session: AsyncSession | Session) -> list[CategoryDTO]:
        return await CategoryRepository.get_all(session)

    @staticmethod
    async def get_category(category_id: str, session: AsyncSession | Session) -> CategoryDTO:
        category = await CategoryRepository.get_by_id(category_id, session)
        if category is None:
            raise CategoryNotFoundException(category_id)
        return category

    @staticmethod
    async def get_category_products(category_id: str, session: AsyncSession | Session) -> list[ProductDTO]:
        await CatalogService.get_category(category_id, session)
        return await ProductRepository.get_by_category(category_id, session)

    @staticmethod
    async def get_product(product_id: str, session: AsyncSession | Session) -> ProductDTO:
        product = await ProductRepository.get_by_id(product_id, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    @staticmethod
    async def get_all_products(session: AsyncSession | Session) -> list[ProductDTO]:
        return await ProductRepository.get_all(session)

    @staticmethod
    async def get_products(product_filter: ProductFilterDTO, language: Language,
                           session: AsyncSession | Session) -> list[ProductDTO]:
        products = await ProductRepository.get_all(session)
        return CatalogService.filter_products(products, product_filter, language)

    @staticmethod
    async def get_favorite_products(product_ids: list[str], session: AsyncSession | Session) -> list[ProductDTO]:
        return await ProductRepository.get_by_ids(product_ids, session)

    @staticmethod
    async def search(query: str, language: Language, session: AsyncSession | Session) -> list[ProductDTO]:
        products = await ProductRepository.get_all(session)
        results = CatalogService.search_products(products, query, language)
        logger.debug(f"Search '{query}' ({language.value}): {len(results)} of {len(products)} products")
        return results

    @staticmethod
    async def get_home(session: AsyncSession | Session) -> dict:
        """Home page sections: featured products, best sellers and a preview row per category."""
        categories = await CategoryRepository.get_all(session)
        previews = []
        for category in categories:
            products = await ProductRepository.get_by_category(category.id, session, limit=CATEGORY_PREVIEW_LIMIT)
            previews.append({"category": category, "products": products})
        featured = await ProductRepository.get_featured(session, FEATURED_LIMIT)
        if not featured:
            # Nothing flagged yet: show the first products in display order
            featured = (await ProductRepository.get_all(session))[:FEATURED_LIMIT]
        return {
            "featured": featured,
            "best_sellers": await ProductRepository.get_best_sellers(session, BEST_SELLERS_LIMIT),
            "categories": previews,
        }
