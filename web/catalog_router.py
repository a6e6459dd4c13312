"""
Storefront read endpoints: categories, products, search, home page, settings.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from enums.language import Language
from models.category import CategoryDTO
from models.product import ProductDTO, ProductFilterDTO
from models.store_settings import StoreSettingsDTO
from services.catalog import CatalogService
from services.settings import SettingsService
from web.dependencies import get_language, get_session

catalog_router = APIRouter(prefix="/api", tags=["catalog"])


@catalog_router.get("/categories", response_model=list[CategoryDTO])
async def list_categories(session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_categories(session)


@catalog_router.get("/categories/{category_id}", response_model=CategoryDTO)
async def get_category(category_id: str, session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_category(category_id, session)


@catalog_router.get("/categories/{category_id}/products", response_model=list[ProductDTO])
async def list_category_products(category_id: str, session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_category_products(category_id, session)


@catalog_router.get("/products", response_model=list[ProductDTO])
async def list_products(category: str | None = Query(None),
                        q: str = Query(""),
                        min_price: float = Query(0.0, ge=0),
                        max_price: float = Query(1000.0, ge=0),
                        language: Language = Depends(get_language),
                        session: AsyncSession = Depends(get_session)):
    """
    Products page.

    Example:
        GET /api/products?category=all&q=oud&min_price=20&max_price=80&lang=ar
    """
    product_filter = ProductFilterDTO(category_id=category, query=q, min_price=min_price, max_price=max_price)
    return await CatalogService.get_products(product_filter, language, session)


# Declared before /products/{product_id} so "home" is not taken for an id
@catalog_router.get("/products/home")
async def home_page(session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_home(session)


@catalog_router.get("/products/{product_id}", response_model=ProductDTO)
async def get_product(product_id: str, session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_product(product_id, session)


@catalog_router.get("/search", response_model=list[ProductDTO])
async def search(q: str = Query(""),
                 language: Language = Depends(get_language),
                 session: AsyncSession = Depends(get_session)):
    return await CatalogService.search(q, language, session)


@catalog_router.get("/settings", response_model=StoreSettingsDTO)
async def get_settings(session: AsyncSession = Depends(get_session)):
    return await SettingsService.get_settings(session)
